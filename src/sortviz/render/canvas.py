from __future__ import annotations

from dataclasses import dataclass, field

import pyray as rl

from ..color import BLACK, RGBA


@dataclass(slots=True)
class _Fill:
    x: float
    y: float
    width: float
    height: float
    color: RGBA


@dataclass(slots=True)
class RaylibCanvas:
    """Persistent 2D canvas backed by a raylib render texture.

    Fills are queued by `draw()` and baked into the render target by
    `flush()`, so painted columns survive across frames the way a
    retained-mode canvas does. `present()` blits the target to the screen.
    """

    width: int
    height: int
    render_target: rl.RenderTexture | None = None
    _queue: list[_Fill] = field(default_factory=list)
    _clear_color: RGBA | None = None

    def open(self) -> None:
        if self.render_target is not None:
            return
        self.render_target = rl.load_render_texture(int(self.width), int(self.height))
        self._clear_color = BLACK

    def close(self) -> None:
        if self.render_target is not None:
            rl.unload_render_texture(self.render_target)
            self.render_target = None
        self._queue.clear()

    def clear(self, color: RGBA) -> None:
        self._queue.clear()
        self._clear_color = color

    def draw(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        self._queue.append(_Fill(float(x), float(y), float(width), float(height), color))

    def flush(self) -> None:
        target = self.render_target
        if target is None:
            return
        if self._clear_color is None and not self._queue:
            return
        rl.begin_texture_mode(target)
        if self._clear_color is not None:
            rl.clear_background(self._clear_color.to_rl())
            self._clear_color = None
        for fill in self._queue:
            rl.draw_rectangle_rec(rl.Rectangle(fill.x, fill.y, fill.width, fill.height), fill.color.to_rl())
        rl.end_texture_mode()
        self._queue.clear()

    def present(self, x: float = 0.0, y: float = 0.0) -> None:
        target = self.render_target
        if target is None:
            return
        # Render textures are stored bottom-up; flip vertically on blit.
        src = rl.Rectangle(0.0, 0.0, float(target.texture.width), -float(target.texture.height))
        dst = rl.Rectangle(float(x), float(y), float(self.width), float(self.height))
        rl.draw_texture_pro(target.texture, src, dst, rl.Vector2(0.0, 0.0), 0.0, rl.WHITE)
