from __future__ import annotations

from .engine import (
    DEFAULT_CYCLES_PER_TICK,
    DEFAULT_RESTORE_THRESHOLD,
    CellState,
    CellVisual,
    FrameHook,
    PlaybackContext,
    PlaybackEngine,
    PlaybackState,
)
from .stats import StatsReport, StepCounters, decode_stats, encode_stats

__all__ = [
    "DEFAULT_CYCLES_PER_TICK",
    "DEFAULT_RESTORE_THRESHOLD",
    "CellState",
    "CellVisual",
    "FrameHook",
    "PlaybackContext",
    "PlaybackEngine",
    "PlaybackState",
    "StatsReport",
    "StepCounters",
    "decode_stats",
    "encode_stats",
]
