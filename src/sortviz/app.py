from __future__ import annotations

import pyray as rl

from .views.types import View


def run_view(
    view: View,
    *,
    width: int = 1024,
    height: int = 768,
    title: str = "sortviz",
    fps: int = 60,
) -> None:
    """Run a raylib window around a single view until it or the window asks to close.

    The view is opened after the GL context exists and closed before it is
    torn down, so it may own GPU resources such as render textures.
    """
    rl.set_config_flags(rl.ConfigFlags.FLAG_VSYNC_HINT)
    rl.init_window(int(width), int(height), title)
    rl.set_exit_key(rl.KeyboardKey.KEY_NULL)
    rl.set_target_fps(int(fps))
    try:
        view.open()
        try:
            while not (view.close_requested or rl.window_should_close()):
                view.update(rl.get_frame_time())
                rl.begin_drawing()
                view.draw()
                rl.end_drawing()
        finally:
            view.close()
    finally:
        rl.close_window()
