from __future__ import annotations

import random

import pytest

from sortviz.generate import Distribution, generate, value_range
from sortviz.trace import Step, StepKind


@pytest.mark.parametrize("distribution", list(Distribution))
@pytest.mark.parametrize("size", [0, 1, 2, 9, 10, 37])
def test_generate_emits_one_start_step_per_index_within_range(distribution: Distribution, size: int) -> None:
    array, steps = generate(size, distribution, rng=random.Random(size))

    assert len(array) == size
    assert [step.index for step in steps] == list(range(size))
    assert all(step.kind == StepKind.START for step in steps)
    assert [step.value for step in steps] == array
    low, high = value_range(size, distribution)
    assert all(low <= value <= high for value in array)


def test_generate_ascending_has_no_permutation() -> None:
    array, steps = generate(5, "ascending")

    assert array == [0, 1, 2, 3, 4]
    assert steps == [Step(index=ii, value=ii, kind=StepKind.START) for ii in range(5)]


def test_generate_descending_equal_and_clustered_values() -> None:
    assert generate(4, Distribution.DESCENDING)[0] == [3, 2, 1, 0]
    assert generate(5, Distribution.EQUAL)[0] == [2, 2, 2, 2, 2]
    assert value_range(25, Distribution.MOST_EQUAL) == (10, 30)


@pytest.mark.parametrize("distribution", [Distribution.RANDOM, Distribution.SIMILAR, Distribution.MOST_EQUAL])
def test_permutations_preserve_the_value_multiset(distribution: Distribution) -> None:
    size = 40
    array, _ = generate(size, distribution, rng=random.Random(7))

    if distribution == Distribution.MOST_EQUAL:
        assert sorted(array) == [10 * (1 + ii // 10) for ii in range(size)]
    else:
        assert sorted(array) == list(range(size))


def test_similar_only_moves_values_locally() -> None:
    size = 200
    array, _ = generate(size, Distribution.SIMILAR, rng=random.Random(11))

    # Each of the `size` jittered swaps spans at most two positions, so values
    # cannot drift far in aggregate; a fully random shuffle would.
    drift = sum(abs(value - idx) for idx, value in enumerate(array)) / size
    assert drift < 10.0


def test_generate_is_deterministic_for_a_seed() -> None:
    first = generate(30, Distribution.RANDOM, rng=random.Random(1234))
    second = generate(30, Distribution.RANDOM, rng=random.Random(1234))
    assert first == second


def test_distribution_parse_rejects_unknown_names() -> None:
    assert Distribution.parse("mostEqual") is Distribution.MOST_EQUAL
    with pytest.raises(ValueError, match="unknown distribution 'sorted'"):
        Distribution.parse("sorted")


def test_generate_rejects_negative_size() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        generate(-1, Distribution.RANDOM)
