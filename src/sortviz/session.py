from __future__ import annotations

import random

from .color import DEFAULT_PALETTE, Palette
from .debug_log import playback_debug_log
from .generate import Distribution, generate
from .playback import (
    DEFAULT_CYCLES_PER_TICK,
    DEFAULT_RESTORE_THRESHOLD,
    FrameHook,
    PlaybackContext,
    PlaybackEngine,
)
from .render.surface import RecordingSurface, Surface
from .sim.scheduler import FrameScheduler, RefreshFrameSource, run_until_idle
from .sorts import SortDriver
from .trace import StepRecorder, Trace


def record_sort(
    driver: SortDriver,
    size: int = 50,
    distribution: Distribution | str = Distribution.RANDOM,
    *,
    rng: random.Random | None = None,
) -> Trace:
    """Generate an array, run `driver` over it to completion, and freeze the trace."""
    distribution = Distribution.parse(distribution)
    array, start_steps = generate(size, distribution, rng=rng)
    recorder = StepRecorder()
    recorder.extend(start_steps)
    driver(array, recorder)
    trace = recorder.finish()
    playback_debug_log(
        "recorded",
        size=int(size),
        distribution=distribution,
        steps=len(trace),
    )
    return trace


def replay_headless(
    trace: Trace,
    *,
    surface: Surface | None = None,
    palette: Palette = DEFAULT_PALETTE,
    cycles_per_tick: int = DEFAULT_CYCLES_PER_TICK,
    restore_threshold: int = DEFAULT_RESTORE_THRESHOLD,
    on_frame: FrameHook | None = None,
    max_frames: int = 10_000_000,
) -> PlaybackEngine:
    """Replay `trace` to completion without a window, one refresh per tick."""
    if surface is None:
        surface = RecordingSurface()
    source = RefreshFrameSource()
    ctx = PlaybackContext(surface=surface, scheduler=FrameScheduler(source), palette=palette)
    engine = PlaybackEngine(ctx, cycles_per_tick=cycles_per_tick, restore_threshold=restore_threshold)
    engine.load(trace)
    engine.play(on_frame)
    run_until_idle(source, max_frames=max_frames)
    return engine
