from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

FrameCallback = Callable[[], None]


class TaskAlreadyScheduledError(RuntimeError):
    """Raised when a task is scheduled while another one is still pending."""


class FrameSource(Protocol):
    def request(self, callback: FrameCallback) -> int: ...

    def cancel(self, handle: int) -> None: ...


class RefreshFrameSource:
    """Frame source driven by display refreshes.

    The window loop calls `fire()` once per refresh; callbacks requested
    while firing run on the following refresh.
    """

    def __init__(self) -> None:
        self._next_handle = 1
        self._callbacks: dict[int, FrameCallback] = {}
        self.frame_index = 0

    @property
    def pending_count(self) -> int:
        return len(self._callbacks)

    def request(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._callbacks.pop(int(handle), None)

    def fire(self) -> int:
        """Run every callback requested before this refresh. Returns how many ran."""
        ready = list(self._callbacks.items())
        self.frame_index += 1
        ran = 0
        for handle, callback in ready:
            # An earlier callback in this batch may have cancelled this one.
            if self._callbacks.pop(handle, None) is None:
                continue
            callback()
            ran += 1
        return ran


class IntervalFrameSource(RefreshFrameSource):
    """Fixed-interval fallback for hosts without refresh notifications.

    `advance(dt)` accumulates wall time and fires once per whole interval.
    A single call never covers more than `max_catchup` seconds.
    """

    def __init__(self, interval_hz: int = 60, *, max_catchup: float = 0.1) -> None:
        super().__init__()
        interval_hz = int(interval_hz)
        if interval_hz <= 0:
            raise ValueError(f"interval_hz must be positive, got {interval_hz}")
        self.interval_hz = interval_hz
        self.max_catchup = float(max_catchup)
        self._elapsed = 0.0

    @property
    def interval(self) -> float:
        return 1.0 / float(self.interval_hz)

    def advance(self, dt: float) -> int:
        """Add `dt` seconds and fire the elapsed intervals. Returns how many callbacks ran."""
        dt = min(float(dt), self.max_catchup)
        if dt <= 0.0:
            return 0
        self._elapsed += dt
        interval = self.interval
        due = int((self._elapsed + 1e-9) / interval)
        self._elapsed = max(0.0, self._elapsed - interval * float(due))
        ran = 0
        for _ in range(due):
            ran += self.fire()
        return ran


def run_until_idle(source: RefreshFrameSource, *, max_frames: int = 1_000_000) -> int:
    """Fire refreshes until no callback is pending. Returns the number of frames fired."""
    frames = 0
    while source.pending_count > 0:
        if frames >= max_frames:
            raise RuntimeError(f"frame source still busy after {max_frames} frames")
        source.fire()
        frames += 1
    return frames


class FrameScheduler:
    """Cooperative scheduler holding at most one pending task.

    A task that wants to keep running must reschedule itself; the pending
    slot is released before the task is invoked.
    """

    def __init__(self, source: FrameSource) -> None:
        self._source = source
        self._handle: int | None = None

    @property
    def source(self) -> FrameSource:
        return self._source

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, task: FrameCallback) -> None:
        if self._handle is not None:
            raise TaskAlreadyScheduledError("task already queued")

        def _run() -> None:
            self._handle = None
            task()

        self._handle = self._source.request(_run)

    def cancel(self) -> None:
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        self._source.cancel(handle)
