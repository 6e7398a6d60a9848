from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import datetime as dt
import os
from pathlib import Path
from threading import Lock


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def format_debug_line(event: str, fields: dict[str, object], *, when: dt.datetime | None = None) -> str:
    """Render one `event=<name> key=value ...` line with keys in sorted order."""
    stamp = (when or _utc_now()).isoformat(timespec="milliseconds")
    parts = [f"{stamp} event={str(event).strip()}"]
    for key in sorted(fields):
        text = str(fields[key]).replace("\n", "\\n")
        parts.append(f"{key}={text}")
    return " ".join(parts) + "\n"


class _PlaybackDebugSink:
    """Process-wide append-only log file. Writes are dropped while no file is open."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._path: Path | None = None

    @property
    def path(self) -> Path | None:
        with self._lock:
            return self._path

    def open(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            self._path = path

    def close(self) -> None:
        with self._lock:
            self._path = None

    def write(self, line: str) -> None:
        with self._lock:
            if self._path is None:
                return
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)


_SINK = _PlaybackDebugSink()


def playback_debug_log_path() -> Path | None:
    return _SINK.path


def init_playback_debug_log(
    *,
    base_dir: Path,
    sort: str,
    size: int,
    distribution: str,
) -> Path:
    stamp = _utc_now().strftime("%Y%m%dT%H%M%S.%fZ")
    path = base_dir / "logs" / "playback" / f"playback-pid{os.getpid()}-{stamp}.log"
    _SINK.open(path)
    playback_debug_log(
        "init",
        sort=str(sort),
        size=int(size),
        distribution=str(distribution),
        pid=int(os.getpid()),
    )
    return path


def playback_debug_log(event: str, **fields: object) -> None:
    if _SINK.path is None:
        return
    _SINK.write(format_debug_line(event, fields))


def close_playback_debug_log() -> None:
    _SINK.close()


@contextmanager
def playback_debug_session(
    *,
    enabled: bool,
    base_dir: Path,
    sort: str,
    size: int,
    distribution: str,
) -> Iterator[Path | None]:
    """Open the playback log for the duration of a block when `enabled`."""
    if not enabled:
        yield None
        return
    path = init_playback_debug_log(base_dir=base_dir, sort=sort, size=size, distribution=distribution)
    try:
        yield path
    finally:
        playback_debug_log("close")
        close_playback_debug_log()


__all__ = [
    "close_playback_debug_log",
    "format_debug_line",
    "init_playback_debug_log",
    "playback_debug_log",
    "playback_debug_log_path",
    "playback_debug_session",
]
