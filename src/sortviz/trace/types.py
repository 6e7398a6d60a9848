from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias, overload

Number: TypeAlias = int | float


class UnknownStepKindError(RuntimeError):
    """Raised when playback meets a step kind outside `StepKind`."""


class StepKind(StrEnum):
    START = "start"
    CMP = "cmp"
    SWAP = "swap"
    COPY = "copy"
    SET = "set"


# Cycle weight of each step kind during playback.
COST_TABLE: dict[StepKind, int] = {
    StepKind.START: 0,
    StepKind.CMP: 3,
    StepKind.SWAP: 6,
    StepKind.COPY: 4,
    StepKind.SET: 2,
}


def step_cost(kind: object) -> int:
    try:
        return COST_TABLE[StepKind(kind)]
    except ValueError:
        raise UnknownStepKindError(f"unknown step kind: {kind!r}") from None


@dataclass(frozen=True, slots=True)
class Step:
    index: int
    value: Number
    kind: StepKind


@dataclass(frozen=True, slots=True)
class Trace:
    """Complete, ordered record of one sort run.

    `size` and `max_value` are derived from the `start` steps emitted by the
    generator; later steps never introduce new cells.
    """

    steps: tuple[Step, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    @overload
    def __getitem__(self, item: int) -> Step: ...

    @overload
    def __getitem__(self, item: slice) -> tuple[Step, ...]: ...

    def __getitem__(self, item: int | slice) -> Step | tuple[Step, ...]:
        return self.steps[item]

    @property
    def size(self) -> int:
        size = 0
        for step in self.steps:
            if step.kind == StepKind.START:
                size = max(size, int(step.index) + 1)
        return size

    @property
    def max_value(self) -> Number:
        max_value: Number = 0
        for step in self.steps:
            if step.kind == StepKind.START:
                max_value = max(max_value, step.value)
        return max_value

    def count(self, kind: StepKind | str) -> int:
        return sum(1 for step in self.steps if step.kind == kind)

    def initial_values(self) -> list[Number]:
        values: list[Number] = [0] * self.size
        for step in self.steps:
            if step.kind == StepKind.START:
                values[int(step.index)] = step.value
        return values
