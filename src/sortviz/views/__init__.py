from __future__ import annotations

from .sort_playback import SortPlaybackView, SortViewConfig
from .types import View

__all__ = ["SortPlaybackView", "SortViewConfig", "View"]
