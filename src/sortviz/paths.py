from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "sortviz"
RUNTIME_DIR_ENV = "SORTVIZ_RUNTIME_DIR"


def default_runtime_dir() -> Path:
    override = os.environ.get(RUNTIME_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)
