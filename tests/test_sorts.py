from __future__ import annotations

import random

import pytest

from sortviz.generate import Distribution, generate
from sortviz.sorts import SortEntry, all_sorts, register_sort, sort_by_name
from sortviz.trace import StepKind, StepRecorder

BUILTIN_SORTS = ["bubble", "insertion", "selection", "shell", "quick", "heap", "merge"]


def test_builtin_sorts_are_registered() -> None:
    names = [entry.name for entry in all_sorts()]
    for name in BUILTIN_SORTS:
        assert name in names
    assert sort_by_name("quick").title == "Quicksort"


def test_sort_by_name_lists_available_sorts_on_miss() -> None:
    with pytest.raises(ValueError, match="unknown sort 'bogo'. Available: bubble"):
        sort_by_name("bogo")


def test_register_sort_rejects_duplicates() -> None:
    with pytest.raises(ValueError, match="already registered"):
        register_sort("bubble", "Another bubble")(lambda _array, _rec: None)


@pytest.mark.parametrize("name", BUILTIN_SORTS)
@pytest.mark.parametrize("distribution", list(Distribution))
@pytest.mark.parametrize("size", [0, 1, 2, 23])
def test_builtin_sort_orders_array_and_trace_replays_to_it(name: str, distribution: Distribution, size: int) -> None:
    entry: SortEntry = sort_by_name(name)
    array, start_steps = generate(size, distribution, rng=random.Random(size * 31 + 7))
    expected = sorted(array)
    rec = StepRecorder()
    rec.extend(start_steps)

    entry.driver(array, rec)
    trace = rec.finish()

    assert array == expected
    assert all(0 <= step.index < size for step in trace)

    # Replaying only the recorded values must reproduce the final array, and
    # every compare must have seen the value the replay holds at that point.
    replayed = trace.initial_values()
    for step in trace:
        if step.kind == StepKind.CMP:
            assert replayed[step.index] == step.value
        elif step.kind != StepKind.START:
            replayed[step.index] = step.value
    assert replayed == expected


def test_merge_sort_moves_values_with_copy_and_set() -> None:
    array, start_steps = generate(16, Distribution.DESCENDING)
    rec = StepRecorder()
    rec.extend(start_steps)

    sort_by_name("merge").driver(array, rec)
    trace = rec.finish()

    assert trace.count(StepKind.SWAP) == 0
    assert trace.count(StepKind.COPY) > 0
    assert trace.count(StepKind.SET) > 0
