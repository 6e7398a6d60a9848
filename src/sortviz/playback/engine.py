from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..color import DEFAULT_PALETTE, RGBA, Palette
from ..debug_log import playback_debug_log
from ..render.surface import Surface, column_rect
from ..sim.scheduler import FrameScheduler
from ..trace import Number, Step, StepKind, Trace, UnknownStepKindError, step_cost
from .stats import StatsReport, StepCounters

DEFAULT_CYCLES_PER_TICK = 10
DEFAULT_RESTORE_THRESHOLD = 20

FrameHook = Callable[[bool], None]


class PlaybackState(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"
    DRAINING = "draining"
    FINISHED = "finished"


class CellVisual(StrEnum):
    SETTLED = "settled"
    HIGHLIGHTED = "highlighted"


@dataclass(slots=True)
class CellState:
    index: int
    value: Number
    last_highlight_cycle: int = 0
    highlight: StepKind | None = None

    @property
    def visual(self) -> CellVisual:
        if self.highlight is None:
            return CellVisual.SETTLED
        return CellVisual.HIGHLIGHTED

    def can_mark(self) -> bool:
        # Compare highlights may be overwritten; write highlights hold until restored.
        return self.highlight is None or self.highlight == StepKind.CMP


@dataclass(frozen=True, slots=True)
class PlaybackContext:
    surface: Surface
    scheduler: FrameScheduler
    palette: Palette = DEFAULT_PALETTE


class PlaybackEngine:
    """Replays a finished trace as a cost-weighted column animation.

    One tick runs per scheduled frame. A `PLAYING` tick consumes steps until
    their summed cycle cost reaches `cycles_per_tick`; once the trace is
    exhausted the engine enters `DRAINING`, revealing one column per tick
    until every cell is settled, then stops in `FINISHED`.

    The cycle clock advances once per tick. A highlighted cell falls back to
    the settled color once the clock is more than `restore_threshold` ticks
    past its last highlight, even if no further step touches it.
    """

    def __init__(
        self,
        ctx: PlaybackContext,
        *,
        cycles_per_tick: int = DEFAULT_CYCLES_PER_TICK,
        restore_threshold: int = DEFAULT_RESTORE_THRESHOLD,
    ) -> None:
        cycles_per_tick = int(cycles_per_tick)
        if cycles_per_tick <= 0:
            raise ValueError(f"cycles_per_tick must be positive, got {cycles_per_tick}")
        restore_threshold = int(restore_threshold)
        if restore_threshold < 0:
            raise ValueError(f"restore_threshold must be non-negative, got {restore_threshold}")

        self._ctx = ctx
        self.cycles_per_tick = cycles_per_tick
        self.restore_threshold = restore_threshold

        self._state = PlaybackState.IDLE
        self._trace: Trace | None = None
        self._cells: list[CellState] = []
        self._size = 0
        self._max_value: Number = 0
        self._cursor = 0
        self._clock = 0
        self._tick_cycles = 0
        self._reveal_index = 0
        self._counters = StepCounters()
        self._on_frame: FrameHook | None = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def trace(self) -> Trace | None:
        return self._trace

    @property
    def cursor(self) -> int:
        return int(self._cursor)

    @property
    def clock(self) -> int:
        return int(self._clock)

    @property
    def size(self) -> int:
        return int(self._size)

    @property
    def max_value(self) -> Number:
        return self._max_value

    @property
    def cells(self) -> tuple[CellState, ...]:
        return tuple(self._cells)

    @property
    def finished(self) -> bool:
        return self._state == PlaybackState.FINISHED

    def load(self, trace: Trace) -> None:
        self._ctx.scheduler.cancel()
        self._trace = trace
        self._size = trace.size
        self._max_value = trace.max_value
        self._cells = [CellState(index=idx, value=value) for idx, value in enumerate(trace.initial_values())]
        self._cursor = 0
        self._clock = 0
        self._tick_cycles = 0
        self._reveal_index = 0
        self._counters.reset()
        self._on_frame = None
        self._ctx.surface.clear(self._ctx.palette.background)
        self._set_state(PlaybackState.IDLE)

    def play(self, on_frame: FrameHook | None = None) -> None:
        if self._trace is None:
            raise ValueError("no trace loaded")
        if self._state != PlaybackState.IDLE:
            raise ValueError(f"playback already started (state={self._state})")
        self._on_frame = on_frame
        self._set_state(PlaybackState.PLAYING)
        self._ctx.scheduler.schedule(self._tick)

    def destroy(self) -> None:
        pending = self._ctx.scheduler.pending
        self._ctx.scheduler.cancel()
        playback_debug_log("destroy", state=self._state, cursor=self._cursor, pending=pending)

    def get(self, kind: StepKind | str) -> int:
        return self._counters.get(kind)

    def stats(self, *, sort: str = "", distribution: str = "") -> StatsReport:
        return StatsReport(
            sort=str(sort),
            size=self.size,
            distribution=str(distribution),
            steps=self.cursor,
            cycles=self.get("cycles"),
            ticks=self.clock,
            start=self.get(StepKind.START),
            cmp=self.get(StepKind.CMP),
            swap=self.get(StepKind.SWAP),
            copy=self.get(StepKind.COPY),
            set=self.get(StepKind.SET),
        )

    def _set_state(self, state: PlaybackState) -> None:
        if state == self._state and state != PlaybackState.IDLE:
            return
        self._state = state
        playback_debug_log(
            "playback_state",
            state=state,
            cursor=self._cursor,
            clock=self._clock,
            cycles=self._counters.cycles,
        )

    def _notify(self, more_pending: bool) -> None:
        hook = self._on_frame
        if hook is not None:
            hook(bool(more_pending))

    def _tick(self) -> None:
        if self._state == PlaybackState.PLAYING:
            self._play_tick()
        elif self._state == PlaybackState.DRAINING:
            self._drain_tick()

    def _play_tick(self) -> None:
        trace = self._trace
        if trace is None:
            raise RuntimeError("playback tick ran without a loaded trace")
        while True:
            if self._cursor >= len(trace):
                self._notify(False)
                self._set_state(PlaybackState.DRAINING)
                self._drain_tick()
                return

            step = trace[self._cursor]
            self._cursor += 1
            cycles = self._apply_step(step)
            self._counters.record(step.kind, cycles)
            self._tick_cycles += cycles
            if self._tick_cycles >= self.cycles_per_tick:
                self._tick_cycles -= self.cycles_per_tick
                self._ctx.scheduler.schedule(self._tick)
                self._notify(True)
                break
        self._advance_clock()

    def _drain_tick(self) -> None:
        self._reveal_next()
        self._advance_clock()
        if self._reveal_index < self._size or any(cell.highlight is not None for cell in self._cells):
            self._ctx.scheduler.schedule(self._tick)
            return
        self._set_state(PlaybackState.FINISHED)

    def _apply_step(self, step: Step) -> int:
        palette = self._ctx.palette
        match step.kind:
            case StepKind.START:
                self._cells[step.index].value = step.value
                self._paint(step.index, step.value, palette.settled)
            case StepKind.CMP:
                if self._mark(step):
                    self._paint(step.index, step.value, palette.compare)
            case StepKind.SWAP | StepKind.COPY | StepKind.SET:
                self._paint(step.index, step.value, palette.for_kind(StepKind(step.kind)))
                self._mark(step)
            case _:
                raise UnknownStepKindError(f"unknown step kind: {step.kind!r}")
        return step_cost(step.kind)

    def _mark(self, step: Step) -> bool:
        cell = self._cells[step.index]
        cell.value = step.value
        if not cell.can_mark():
            return False
        cell.highlight = StepKind(step.kind)
        cell.last_highlight_cycle = self._clock
        return True

    def _reveal_next(self) -> None:
        if self._reveal_index >= self._size:
            return
        cell = self._cells[self._reveal_index]
        self._reveal_index += 1
        cell.highlight = None
        self._paint(cell.index, cell.value, self._ctx.palette.reveal)

    def _advance_clock(self) -> None:
        self._clock += 1
        self._restore_expired()

    def _restore_expired(self) -> None:
        settled = self._ctx.palette.settled
        for cell in self._cells:
            if cell.highlight is None:
                continue
            if self._clock - cell.last_highlight_cycle > self.restore_threshold:
                cell.highlight = None
                self._paint(cell.index, cell.value, settled)

    def _paint(self, index: int, value: Number, color: RGBA) -> None:
        surface = self._ctx.surface
        rect = column_rect(
            surface_width=surface.width,
            surface_height=surface.height,
            cell_count=self._size,
            index=index,
            value=value,
            max_value=self._max_value,
        )
        surface.draw(rect.x, 0.0, rect.width, float(surface.height), self._ctx.palette.background)
        surface.draw(rect.x, rect.y, rect.width, rect.height, color)
