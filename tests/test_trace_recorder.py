from __future__ import annotations

import pytest

from sortviz.trace import COST_TABLE, Step, StepKind, StepRecorder, Trace, UnknownStepKindError, step_cost


def test_recorder_keeps_exact_call_order() -> None:
    array = [3, 1, 2]
    rec = StepRecorder()

    rec.compare(array, 0, 1)
    rec.swap(array, 0, 1)
    rec.copy(array, 2, 0)
    rec.set(array, 1, 7)
    rec.lt(array, 2, 5)

    trace = rec.finish()
    assert [(step.kind, step.index, step.value) for step in trace] == [
        (StepKind.CMP, 0, 3),
        (StepKind.SWAP, 0, 1),
        (StepKind.SWAP, 1, 3),
        (StepKind.COPY, 0, 2),
        (StepKind.SET, 1, 7),
        (StepKind.CMP, 2, 2),
    ]
    assert array == [2, 7, 2]


def test_compare_records_current_value_not_argument() -> None:
    array = [10, 4]
    rec = StepRecorder()

    assert rec.compare(array, 0, 4) == 6
    assert rec.compare(array, 1, 10) == -6

    assert rec.finish().steps == (
        Step(index=0, value=10, kind=StepKind.CMP),
        Step(index=1, value=4, kind=StepKind.CMP),
    )


def test_swap_records_post_swap_values_for_both_indices() -> None:
    array = [0, 1]
    rec = StepRecorder()
    rec.swap(array, 0, 1)

    assert array == [1, 0]
    assert rec.finish().steps == (
        Step(index=0, value=1, kind=StepKind.SWAP),
        Step(index=1, value=0, kind=StepKind.SWAP),
    )


def test_swap_with_itself_still_records_two_steps() -> None:
    array = [5, 6]
    rec = StepRecorder()
    rec.swap(array, 1, 1)

    assert array == [5, 6]
    assert rec.finish().steps == (
        Step(index=1, value=6, kind=StepKind.SWAP),
        Step(index=1, value=6, kind=StepKind.SWAP),
    )


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("gt", [True, False, False]),
        ("lt", [False, False, True]),
        ("ge", [True, True, False]),
        ("le", [False, True, True]),
        ("eq", [False, True, False]),
        ("ne", [True, False, True]),
    ],
)
def test_predicates_follow_compare_sign_with_one_step_each(name: str, expected: list[bool]) -> None:
    array = [5]
    rec = StepRecorder()
    predicate = getattr(rec, name)

    results = [predicate(array, 0, other) for other in (4, 5, 6)]

    assert results == expected
    trace = rec.finish()
    assert len(trace) == 3
    assert all(step.kind == StepKind.CMP and step.value == 5 for step in trace)


def test_finished_trace_is_not_affected_by_later_recording() -> None:
    array = [1, 2]
    rec = StepRecorder()
    rec.set(array, 0, 9)
    trace = rec.finish()

    rec.set(array, 1, 9)

    assert len(trace) == 1
    assert rec.step_count == 2


def test_trace_derives_size_and_max_value_from_start_steps() -> None:
    trace = Trace(
        steps=(
            Step(index=0, value=3, kind=StepKind.START),
            Step(index=1, value=8, kind=StepKind.START),
            Step(index=2, value=1, kind=StepKind.START),
            Step(index=1, value=99, kind=StepKind.SET),
        )
    )

    assert trace.size == 3
    assert trace.max_value == 8
    assert trace.initial_values() == [3, 8, 1]
    assert trace.count(StepKind.START) == 3
    assert trace.count("set") == 1


def test_empty_trace_has_no_cells() -> None:
    trace = StepRecorder().finish()
    assert len(trace) == 0
    assert trace.size == 0
    assert trace.max_value == 0


def test_step_cost_table() -> None:
    assert COST_TABLE == {
        StepKind.START: 0,
        StepKind.CMP: 3,
        StepKind.SWAP: 6,
        StepKind.COPY: 4,
        StepKind.SET: 2,
    }
    assert step_cost("swap") == 6
    with pytest.raises(UnknownStepKindError, match="unknown step kind"):
        step_cost("shuffle")


@pytest.mark.parametrize(
    "operation",
    [
        lambda rec, array: rec.swap(array, 0, -1),
        lambda rec, array: rec.swap(array, 3, 0),
        lambda rec, array: rec.compare(array, -1, 0),
        lambda rec, array: rec.copy(array, -2, 0),
        lambda rec, array: rec.set(array, -3, 9),
    ],
)
def test_out_of_range_indices_are_rejected_before_touching_the_array(operation) -> None:  # noqa: ANN001
    array = [3, 1, 2]
    rec = StepRecorder()

    with pytest.raises(IndexError, match="out of range for array of size 3"):
        operation(rec, array)

    assert array == [3, 1, 2]
    assert rec.step_count == 0
