from __future__ import annotations

from collections.abc import MutableSequence

from ..trace import Number, StepRecorder
from .registry import register_sort


@register_sort("quick", "Quicksort")
def quick_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    # Explicit stack: pre-sorted inputs would otherwise recurse once per element.
    stack = [(0, len(array) - 1)]
    while stack:
        lo, hi = stack.pop()
        if lo >= hi:
            continue
        rec.swap(array, (lo + hi) // 2, hi)
        pivot = array[hi]
        store = lo
        for ii in range(lo, hi):
            if rec.lt(array, ii, pivot):
                rec.swap(array, ii, store)
                store += 1
        rec.swap(array, store, hi)
        stack.append((lo, store - 1))
        stack.append((store + 1, hi))


def _sift_down(array: MutableSequence[Number], rec: StepRecorder, root: int, end: int) -> None:
    while True:
        child = 2 * root + 1
        if child > end:
            return
        if child + 1 <= end and rec.lt(array, child, array[child + 1]):
            child += 1
        if not rec.lt(array, root, array[child]):
            return
        rec.swap(array, root, child)
        root = child


@register_sort("heap", "Heapsort")
def heap_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    n = len(array)
    for start in range(n // 2 - 1, -1, -1):
        _sift_down(array, rec, start, n - 1)
    for end in range(n - 1, 0, -1):
        rec.swap(array, 0, end)
        _sift_down(array, rec, 0, end - 1)


@register_sort("merge", "Merge sort")
def merge_sort(array: MutableSequence[Number], rec: StepRecorder) -> None:
    """Bottom-up merge sort.

    The left run of each merge is held aside; right-run elements are moved
    down with `copy` and held left elements are written back with `set`.
    The write cursor never passes the right-run read cursor, so `copy`
    never clobbers an unread element.
    """

    n = len(array)
    width = 1
    while width < n:
        for lo in range(0, n, 2 * width):
            mid = min(lo + width, n)
            hi = min(lo + 2 * width, n)
            if mid >= hi:
                continue
            left = list(array[lo:mid])
            ii = 0
            jj = mid
            kk = lo
            while ii < len(left) and jj < hi:
                if rec.lt(array, jj, left[ii]):
                    rec.copy(array, jj, kk)
                    jj += 1
                else:
                    rec.set(array, kk, left[ii])
                    ii += 1
                kk += 1
            while ii < len(left):
                rec.set(array, kk, left[ii])
                ii += 1
                kk += 1
        width *= 2
