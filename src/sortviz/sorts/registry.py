from __future__ import annotations

from collections.abc import Callable, MutableSequence
from dataclasses import dataclass
from typing import TypeAlias

from ..trace import Number, StepRecorder

SortDriver: TypeAlias = Callable[[MutableSequence[Number], StepRecorder], None]


@dataclass(frozen=True, slots=True)
class SortEntry:
    name: str
    title: str
    driver: SortDriver


_SORTS: dict[str, SortEntry] = {}


def register_sort(name: str, title: str) -> Callable[[SortDriver], SortDriver]:
    def _register(driver: SortDriver) -> SortDriver:
        if name in _SORTS:
            raise ValueError(f"sort already registered: {name!r}")
        _SORTS[name] = SortEntry(name=name, title=title, driver=driver)
        return driver

    return _register


def all_sorts() -> list[SortEntry]:
    return list(_SORTS.values())


def sort_by_name(name: str) -> SortEntry:
    entry = _SORTS.get(str(name))
    if entry is None:
        available = ", ".join(sorted(_SORTS))
        raise ValueError(f"unknown sort {name!r}. Available: {available}")
    return entry
