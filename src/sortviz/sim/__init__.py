from __future__ import annotations

from .scheduler import (
    FrameCallback,
    FrameScheduler,
    FrameSource,
    IntervalFrameSource,
    RefreshFrameSource,
    TaskAlreadyScheduledError,
    run_until_idle,
)

__all__ = [
    "FrameCallback",
    "FrameScheduler",
    "FrameSource",
    "IntervalFrameSource",
    "RefreshFrameSource",
    "TaskAlreadyScheduledError",
    "run_until_idle",
]
