from __future__ import annotations

from collections.abc import Iterable, MutableSequence

from .types import Number, Step, StepKind, Trace


class StepRecorder:
    """Instrumented array operations.

    Sort drivers receive a recorder alongside the array and must read and
    mutate the array only through these methods; each call appends to the
    trace in call order. Direct array access is not detected.
    """

    def __init__(self) -> None:
        self._steps: list[Step] = []

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @staticmethod
    def _check_index(array: MutableSequence[Number], index: int) -> int:
        # Negative indices would wrap in Python but break the trace cell mapping.
        index = int(index)
        if not 0 <= index < len(array):
            raise IndexError(f"index {index} out of range for array of size {len(array)}")
        return index

    def _add_step(self, index: int, value: Number, kind: StepKind) -> None:
        self._steps.append(Step(index=int(index), value=value, kind=kind))

    def extend(self, steps: Iterable[Step]) -> None:
        self._steps.extend(steps)

    def compare(self, array: MutableSequence[Number], index: int, value: Number) -> Number:
        """Return `array[index] - value`, recording the value found at `index`."""
        index = self._check_index(array, index)
        current = array[index]
        self._add_step(index, current, StepKind.CMP)
        return current - value

    def swap(self, array: MutableSequence[Number], a: int, b: int) -> None:
        a = self._check_index(array, a)
        b = self._check_index(array, b)
        array[a], array[b] = array[b], array[a]
        self._add_step(a, array[a], StepKind.SWAP)
        self._add_step(b, array[b], StepKind.SWAP)

    def copy(self, array: MutableSequence[Number], src: int, dst: int) -> None:
        src = self._check_index(array, src)
        dst = self._check_index(array, dst)
        array[dst] = array[src]
        self._add_step(dst, array[dst], StepKind.COPY)

    def set(self, array: MutableSequence[Number], index: int, value: Number) -> None:
        index = self._check_index(array, index)
        array[index] = value
        self._add_step(index, value, StepKind.SET)

    def gt(self, array: MutableSequence[Number], index: int, value: Number) -> bool:
        return self.compare(array, index, value) > 0

    def lt(self, array: MutableSequence[Number], index: int, value: Number) -> bool:
        return self.compare(array, index, value) < 0

    def ge(self, array: MutableSequence[Number], index: int, value: Number) -> bool:
        return self.compare(array, index, value) >= 0

    def le(self, array: MutableSequence[Number], index: int, value: Number) -> bool:
        return self.compare(array, index, value) <= 0

    def eq(self, array: MutableSequence[Number], index: int, value: Number) -> bool:
        return self.compare(array, index, value) == 0

    def ne(self, array: MutableSequence[Number], index: int, value: Number) -> bool:
        return self.compare(array, index, value) != 0

    def finish(self) -> Trace:
        return Trace(steps=tuple(self._steps))
