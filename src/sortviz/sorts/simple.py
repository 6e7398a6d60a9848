from __future__ import annotations

from collections.abc import MutableSequence

from ..trace import Number, StepRecorder
from .registry import register_sort


@register_sort("bubble", "Bubble sort")
def bubble_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    for end in range(len(array) - 1, 0, -1):
        swapped = False
        for ii in range(end):
            if rec.gt(array, ii, array[ii + 1]):
                rec.swap(array, ii, ii + 1)
                swapped = True
        if not swapped:
            return


@register_sort("insertion", "Insertion sort")
def insertion_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    for ii in range(1, len(array)):
        jj = ii
        while jj > 0 and rec.gt(array, jj - 1, array[jj]):
            rec.swap(array, jj - 1, jj)
            jj -= 1


@register_sort("selection", "Selection sort")
def selection_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    n = len(array)
    for ii in range(n - 1):
        best = ii
        for jj in range(ii + 1, n):
            if rec.lt(array, jj, array[best]):
                best = jj
        if best != ii:
            rec.swap(array, ii, best)


@register_sort("shell", "Shell sort")
def shell_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    """Gapped insertion sort; shifts with `copy` and drops the held value with `set`."""
    n = len(array)
    gap = n // 2
    while gap > 0:
        for ii in range(gap, n):
            value = array[ii]
            jj = ii
            while jj >= gap and rec.gt(array, jj - gap, value):
                rec.copy(array, jj - gap, jj)
                jj -= gap
            rec.set(array, jj, value)
        gap //= 2
