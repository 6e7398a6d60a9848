from __future__ import annotations

from .registry import SortDriver, SortEntry, all_sorts, register_sort, sort_by_name


def _register_builtin_sorts() -> None:
    from . import divide as _divide  # noqa: F401
    from . import simple as _simple  # noqa: F401


_register_builtin_sorts()

__all__ = ["SortDriver", "SortEntry", "all_sorts", "register_sort", "sort_by_name"]
