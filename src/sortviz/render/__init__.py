from __future__ import annotations

from .surface import DrawCall, RecordingSurface, Rect, Surface, column_rect

__all__ = [
    "DrawCall",
    "RecordingSurface",
    "Rect",
    "Surface",
    "column_rect",
]
