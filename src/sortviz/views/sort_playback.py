from __future__ import annotations

import random
from dataclasses import dataclass

import pyray as rl

from ..color import DEFAULT_PALETTE, Palette
from ..debug_log import playback_debug_log
from ..generate import Distribution
from ..playback import (
    DEFAULT_CYCLES_PER_TICK,
    DEFAULT_RESTORE_THRESHOLD,
    PlaybackContext,
    PlaybackEngine,
)
from ..render.canvas import RaylibCanvas
from ..session import record_sort
from ..sim.scheduler import FrameScheduler, IntervalFrameSource, RefreshFrameSource
from ..sorts import SortEntry
from ..trace import StepKind

UI_TEXT_SIZE = 18
UI_TEXT_COLOR = rl.Color(220, 220, 220, 230)
UI_HINT_COLOR = rl.Color(140, 140, 140, 230)
UI_PANEL_COLOR = rl.Color(0, 0, 0, 160)
UI_PADDING = 12


@dataclass(frozen=True, slots=True)
class SortViewConfig:
    sort: SortEntry
    size: int = 50
    distribution: Distribution = Distribution.RANDOM
    cycles_per_tick: int = DEFAULT_CYCLES_PER_TICK
    restore_threshold: int = DEFAULT_RESTORE_THRESHOLD
    interval_hz: int | None = None
    seed: int | None = None


class SortPlaybackView:
    """Records one sort run and animates it into a persistent canvas.

    With `interval_hz` set, ticks are paced by a fixed-interval timer instead
    of one tick per display refresh.
    """

    def __init__(self, config: SortViewConfig, *, width: int, height: int, palette: Palette = DEFAULT_PALETTE) -> None:
        self._config = config
        self._canvas = RaylibCanvas(width=int(width), height=int(height))
        self._rng = random.Random(config.seed)

        self._source: RefreshFrameSource
        if config.interval_hz is not None:
            self._source = IntervalFrameSource(int(config.interval_hz))
        else:
            self._source = RefreshFrameSource()
        self._engine = PlaybackEngine(
            PlaybackContext(surface=self._canvas, scheduler=FrameScheduler(self._source), palette=palette),
            cycles_per_tick=config.cycles_per_tick,
            restore_threshold=config.restore_threshold,
        )
        self._frames_with_work = 0
        self.close_requested = False

    @property
    def engine(self) -> PlaybackEngine:
        return self._engine

    def open(self) -> None:
        self._canvas.open()
        self.restart()

    def close(self) -> None:
        self._engine.destroy()
        self._canvas.close()

    def restart(self) -> None:
        config = self._config
        self._engine.destroy()
        trace = record_sort(config.sort.driver, config.size, config.distribution, rng=self._rng)
        self._frames_with_work = 0
        self._engine.load(trace)
        self._engine.play(self._on_frame)

    def _on_frame(self, more_pending: bool) -> None:
        if more_pending:
            self._frames_with_work += 1
            return
        playback_debug_log(
            "sort_done",
            sort=self._config.sort.name,
            frames=self._frames_with_work,
            cycles=self._engine.get("cycles"),
        )

    def update(self, dt: float) -> None:
        if rl.is_key_pressed(rl.KeyboardKey.KEY_ESCAPE):
            self.close_requested = True
            return
        if rl.is_key_pressed(rl.KeyboardKey.KEY_R):
            self.restart()

        source = self._source
        if isinstance(source, IntervalFrameSource):
            source.advance(dt)
        else:
            source.fire()
        self._canvas.flush()

    def _stats_line(self) -> str:
        engine = self._engine
        parts = [f"{kind}: {engine.get(kind)}" for kind in (StepKind.CMP, StepKind.SWAP, StepKind.COPY, StepKind.SET)]
        parts.append(f"cycles: {engine.get('cycles')}")
        return "  ".join(parts)

    def draw(self) -> None:
        rl.clear_background(rl.BLACK)
        self._canvas.present()

        config = self._config
        title = f"{config.sort.title}  n={config.size}  {config.distribution}"
        rl.draw_rectangle(0, 0, self._canvas.width, UI_PADDING * 2 + UI_TEXT_SIZE * 3, UI_PANEL_COLOR)
        rl.draw_text(title, UI_PADDING, UI_PADDING, UI_TEXT_SIZE, UI_TEXT_COLOR)
        rl.draw_text(self._stats_line(), UI_PADDING, UI_PADDING + UI_TEXT_SIZE, UI_TEXT_SIZE, UI_TEXT_COLOR)
        hint = f"{self._engine.state}  R: new array  ESC: quit"
        rl.draw_text(hint, UI_PADDING, UI_PADDING + UI_TEXT_SIZE * 2, UI_TEXT_SIZE, UI_HINT_COLOR)
