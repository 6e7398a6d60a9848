from __future__ import annotations

from typing import Protocol


class View(Protocol):
    close_requested: bool

    def open(self) -> None: ...

    def close(self) -> None: ...

    def update(self, dt: float) -> None: ...

    def draw(self) -> None: ...
