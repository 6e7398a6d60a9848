from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from ..color import RGBA
from ..trace import Number


class Surface(Protocol):
    @property
    def width(self) -> float: ...

    @property
    def height(self) -> float: ...

    def clear(self, color: RGBA) -> None: ...

    def draw(self, x: float, y: float, width: float, height: float, color: RGBA) -> None: ...


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


def column_rect(
    *,
    surface_width: float,
    surface_height: float,
    cell_count: int,
    index: int,
    value: Number,
    max_value: Number,
) -> Rect:
    width = float(surface_width) / float(cell_count)
    height = float(surface_height) * float(value) / float(max_value) if max_value else 0.0
    x = width * float(index)
    y = float(surface_height) - height
    return Rect(x=x, y=y, width=width, height=height)


@dataclass(frozen=True, slots=True)
class DrawCall:
    x: float
    y: float
    width: float
    height: float
    color: RGBA


@dataclass(slots=True)
class RecordingSurface:
    """In-memory surface that keeps every fill for inspection."""

    width: float = 800.0
    height: float = 600.0
    calls: list[DrawCall] = field(default_factory=list)
    clear_color: RGBA | None = None

    def clear(self, color: RGBA) -> None:
        self.calls.clear()
        self.clear_color = color

    def draw(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        self.calls.append(DrawCall(float(x), float(y), float(width), float(height), color))

    def last_color_at(self, x: float) -> RGBA | None:
        """Color of the most recent non-background fill whose left edge is `x`."""
        for call in reversed(self.calls):
            if call.x == float(x) and call.color != self.clear_color:
                return call.color
        return None
