from __future__ import annotations

from collections import Counter

import msgspec

from ..trace import StepKind


class StatsReport(msgspec.Struct, forbid_unknown_fields=True):
    sort: str
    size: int
    distribution: str
    steps: int
    cycles: int
    ticks: int
    start: int = 0
    cmp: int = 0
    swap: int = 0
    copy: int = 0
    set: int = 0


class StepCounters:
    """Occurrence counts of consumed steps plus the lifetime cycle total."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()
        self.cycles = 0

    def reset(self) -> None:
        self._counts.clear()
        self.cycles = 0

    def record(self, kind: StepKind, cycles: int) -> None:
        self._counts[str(kind)] += 1
        self.cycles += int(cycles)

    def raw(self, kind: StepKind | str) -> int:
        return int(self._counts.get(str(kind), 0))

    def get(self, kind: StepKind | str) -> int:
        name = str(kind)
        if name == "cycles":
            return int(self.cycles)
        value = self.raw(name)
        if name == StepKind.SWAP:
            # Each logical swap records one step per touched index.
            value //= 2
        return value


def encode_stats(report: StatsReport) -> bytes:
    return msgspec.json.encode(report)


def decode_stats(data: bytes | str) -> StatsReport:
    return msgspec.json.decode(data, type=StatsReport)
