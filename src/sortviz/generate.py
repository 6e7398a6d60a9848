from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from .math import clamp_int
from .trace import Step, StepKind

ValueFn = Callable[[int, int], int]
SwapIndexFn = Callable[[int, int, random.Random], int]


class Distribution(StrEnum):
    RANDOM = "random"
    SIMILAR = "similar"
    ASCENDING = "ascending"
    DESCENDING = "descending"
    MOST_EQUAL = "mostEqual"
    EQUAL = "equal"

    @classmethod
    def parse(cls, value: Distribution | str) -> Distribution:
        if isinstance(value, Distribution):
            return value
        try:
            return cls(str(value))
        except ValueError:
            available = ", ".join(item.value for item in cls)
            raise ValueError(f"unknown distribution {value!r}. Available: {available}") from None


def ascending_values(ii: int, size: int) -> int:
    return ii


def descending_values(ii: int, size: int) -> int:
    return size - ii - 1


def clustered_values(ii: int, size: int) -> int:
    return (1 + ii // 10) * 10


def constant_values(ii: int, size: int) -> int:
    return size // 2


def random_swap_index(ii: int, size: int, rng: random.Random) -> int:
    return rng.randrange(size)


def jitter_swap_index(ii: int, size: int, rng: random.Random) -> int:
    return clamp_int(ii - 1 + rng.randrange(3), 0, size - 1)


@dataclass(frozen=True, slots=True)
class DistributionPolicy:
    value_fn: ValueFn
    swap_index_fn: SwapIndexFn | None = None


DISTRIBUTION_POLICIES: dict[Distribution, DistributionPolicy] = {
    Distribution.RANDOM: DistributionPolicy(ascending_values, random_swap_index),
    Distribution.SIMILAR: DistributionPolicy(ascending_values, jitter_swap_index),
    Distribution.ASCENDING: DistributionPolicy(ascending_values),
    Distribution.DESCENDING: DistributionPolicy(descending_values),
    Distribution.MOST_EQUAL: DistributionPolicy(clustered_values, random_swap_index),
    Distribution.EQUAL: DistributionPolicy(constant_values),
}


def generate(
    size: int,
    distribution: Distribution | str = Distribution.RANDOM,
    *,
    rng: random.Random | None = None,
) -> tuple[list[int], list[Step]]:
    """Build an initial array and its `start` steps.

    Values are assigned first, then the optional permutation swaps `size`
    index pairs. The returned steps reflect the final, permuted values.
    """

    size = int(size)
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    policy = DISTRIBUTION_POLICIES[Distribution.parse(distribution)]
    if rng is None:
        rng = random.Random()

    array = [policy.value_fn(ii, size) for ii in range(size)]
    swap_index_fn = policy.swap_index_fn
    if swap_index_fn is not None:
        for ii in range(size):
            a = swap_index_fn(ii, size, rng)
            b = swap_index_fn(ii, size, rng)
            array[a], array[b] = array[b], array[a]

    steps = [Step(index=ii, value=value, kind=StepKind.START) for ii, value in enumerate(array)]
    return array, steps


def value_range(size: int, distribution: Distribution | str) -> tuple[int, int]:
    """Inclusive bounds every generated value falls within."""
    size = int(size)
    if size <= 0:
        return 0, 0
    value_fn = DISTRIBUTION_POLICIES[Distribution.parse(distribution)].value_fn
    values = [value_fn(ii, size) for ii in range(size)]
    return min(values), max(values)
