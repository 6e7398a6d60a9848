from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from construct import Byte, Bytes, Int32ul, Struct

from .generate import Distribution
from .playback import DEFAULT_CYCLES_PER_TICK, DEFAULT_RESTORE_THRESHOLD

SORTVIZ_CFG_NAME = "sortviz.cfg"
SORTVIZ_CFG_SIZE = 0x40
SORT_NAME_SIZE = 0x20
SORT_NAME_MAX_BYTES = SORT_NAME_SIZE - 1

DEFAULT_SCREEN_WIDTH = 1024
DEFAULT_SCREEN_HEIGHT = 768
DEFAULT_TARGET_FPS = 60
DEFAULT_INTERVAL_HZ = 60
DEFAULT_ARRAY_SIZE = 50
DEFAULT_SORT_NAME = "quick"

# Stored as a byte index into this tuple; order is part of the file format.
DISTRIBUTION_ORDER: tuple[Distribution, ...] = (
    Distribution.RANDOM,
    Distribution.SIMILAR,
    Distribution.ASCENDING,
    Distribution.DESCENDING,
    Distribution.MOST_EQUAL,
    Distribution.EQUAL,
)


class FrameSourceKind(IntEnum):
    REFRESH = 0
    INTERVAL = 1


SORTVIZ_CFG_STRUCT = Struct(
    "screen_width" / Int32ul,
    "screen_height" / Int32ul,
    "target_fps" / Int32ul,
    "frame_source" / Byte,
    "distribution" / Byte,
    "reserved_0e" / Bytes(2),
    "interval_hz" / Int32ul,
    "cycles_per_tick" / Int32ul,
    "restore_threshold" / Int32ul,
    "array_size" / Int32ul,
    "sort_name" / Bytes(SORT_NAME_SIZE),
)


@dataclass(slots=True)
class SortvizConfig:
    path: Path
    data: dict

    @property
    def screen_width(self) -> int:
        return int(self.data["screen_width"])

    @screen_width.setter
    def screen_width(self, value: int) -> None:
        self.data["screen_width"] = int(value)

    @property
    def screen_height(self) -> int:
        return int(self.data["screen_height"])

    @screen_height.setter
    def screen_height(self, value: int) -> None:
        self.data["screen_height"] = int(value)

    @property
    def target_fps(self) -> int:
        return int(self.data["target_fps"])

    @target_fps.setter
    def target_fps(self, value: int) -> None:
        self.data["target_fps"] = int(value)

    @property
    def frame_source(self) -> FrameSourceKind:
        return FrameSourceKind(int(self.data["frame_source"]))

    @frame_source.setter
    def frame_source(self, value: FrameSourceKind | int) -> None:
        self.data["frame_source"] = int(FrameSourceKind(int(value)))

    @property
    def interval_hz(self) -> int:
        return int(self.data["interval_hz"])

    @interval_hz.setter
    def interval_hz(self, value: int) -> None:
        self.data["interval_hz"] = int(value)

    @property
    def cycles_per_tick(self) -> int:
        return int(self.data["cycles_per_tick"])

    @cycles_per_tick.setter
    def cycles_per_tick(self, value: int) -> None:
        self.data["cycles_per_tick"] = int(value)

    @property
    def restore_threshold(self) -> int:
        return int(self.data["restore_threshold"])

    @restore_threshold.setter
    def restore_threshold(self, value: int) -> None:
        self.data["restore_threshold"] = int(value)

    @property
    def array_size(self) -> int:
        return int(self.data["array_size"])

    @array_size.setter
    def array_size(self, value: int) -> None:
        self.data["array_size"] = int(value)

    @property
    def distribution(self) -> Distribution:
        index = int(self.data["distribution"])
        if not 0 <= index < len(DISTRIBUTION_ORDER):
            raise ValueError(f"{self.path} has unknown distribution index {index}")
        return DISTRIBUTION_ORDER[index]

    @distribution.setter
    def distribution(self, value: Distribution | str) -> None:
        self.data["distribution"] = DISTRIBUTION_ORDER.index(Distribution.parse(value))

    @property
    def sort_name(self) -> str:
        raw = bytes(self.data["sort_name"])
        return raw.split(b"\x00", 1)[0].decode("ascii", errors="ignore")

    @sort_name.setter
    def sort_name(self, value: str) -> None:
        encoded = str(value).encode("ascii", errors="ignore")[:SORT_NAME_MAX_BYTES]
        buf = bytearray(SORT_NAME_SIZE)
        buf[: len(encoded)] = encoded
        self.data["sort_name"] = bytes(buf)

    def save(self) -> None:
        self.path.write_bytes(SORTVIZ_CFG_STRUCT.build(self.data))


def default_sortviz_cfg_data() -> dict:
    data = SORTVIZ_CFG_STRUCT.parse(bytes(SORTVIZ_CFG_SIZE))
    config = SortvizConfig(path=Path("<memory>"), data=data)
    config.screen_width = DEFAULT_SCREEN_WIDTH
    config.screen_height = DEFAULT_SCREEN_HEIGHT
    config.target_fps = DEFAULT_TARGET_FPS
    config.frame_source = FrameSourceKind.REFRESH
    config.interval_hz = DEFAULT_INTERVAL_HZ
    config.cycles_per_tick = DEFAULT_CYCLES_PER_TICK
    config.restore_threshold = DEFAULT_RESTORE_THRESHOLD
    config.array_size = DEFAULT_ARRAY_SIZE
    config.distribution = Distribution.RANDOM
    config.sort_name = DEFAULT_SORT_NAME
    return data


def _repair(config: SortvizConfig) -> bool:
    """Reset fields that would make the view unusable. Returns True when anything changed."""
    patched = False
    if config.screen_width <= 0 or config.screen_height <= 0:
        config.screen_width = DEFAULT_SCREEN_WIDTH
        config.screen_height = DEFAULT_SCREEN_HEIGHT
        patched = True
    if config.target_fps <= 0:
        config.target_fps = DEFAULT_TARGET_FPS
        patched = True
    if int(config.data.get("frame_source", 0)) not in {int(kind) for kind in FrameSourceKind}:
        config.frame_source = FrameSourceKind.REFRESH
        patched = True
    if config.interval_hz <= 0:
        config.interval_hz = DEFAULT_INTERVAL_HZ
        patched = True
    if config.cycles_per_tick <= 0:
        config.cycles_per_tick = DEFAULT_CYCLES_PER_TICK
        patched = True
    if int(config.data.get("distribution", 0)) >= len(DISTRIBUTION_ORDER):
        config.distribution = Distribution.RANDOM
        patched = True
    if not config.sort_name:
        config.sort_name = DEFAULT_SORT_NAME
        patched = True
    return patched


def ensure_sortviz_cfg(base_dir: Path) -> SortvizConfig:
    path = base_dir / SORTVIZ_CFG_NAME
    if path.exists():
        config = load_sortviz_cfg(path)
        if _repair(config):
            config.save()
        return config
    path.parent.mkdir(parents=True, exist_ok=True)
    config = SortvizConfig(path=path, data=default_sortviz_cfg_data())
    config.save()
    return config


def load_sortviz_cfg(path: Path) -> SortvizConfig:
    data = path.read_bytes()
    if len(data) != SORTVIZ_CFG_SIZE:
        raise ValueError(f"{path} has unexpected size {len(data)} (expected {SORTVIZ_CFG_SIZE})")
    parsed = SORTVIZ_CFG_STRUCT.parse(data)
    return SortvizConfig(path=path, data=parsed)
