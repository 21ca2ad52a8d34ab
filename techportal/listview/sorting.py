"""Column sorting with header-click toggling"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional, Sequence, TypeVar

from .values import comparable

T = TypeVar("T")


class SortDirection(IntEnum):
    ASC = 1
    DESC = -1

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortDirection":
        if value is None:
            return cls.ASC
        text = str(value).strip().lower()
        if text in ("desc", "descending", "-1"):
            return cls.DESC
        if text in ("", "asc", "ascending", "1"):
            return cls.ASC
        raise ValueError(f"Invalid sort direction: {value!r}")


@dataclass
class SortState:
    """Currently sorted column and its direction"""

    column: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    def select(self, column: str) -> "SortState":
        """Same column flips the direction; a new column starts ascending"""
        if self.column == column:
            self.direction = SortDirection(-self.direction)
        else:
            self.column = column
            self.direction = SortDirection.ASC
        return self


def _is_null(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def sort_records(
    rows: Sequence[T],
    accessor: Callable[[T], Any],
    direction: SortDirection = SortDirection.ASC,
) -> list[T]:
    """
    Return a new list ordered by ``accessor``.

    Null and blank values go after every defined value in both directions.
    """
    present = []
    missing = []
    for row in rows:
        value = accessor(row)
        if _is_null(value):
            missing.append(row)
        else:
            present.append((comparable(value), row))

    present.sort(key=lambda pair: pair[0], reverse=direction is SortDirection.DESC)
    return [row for _, row in present] + missing


def sort_icon(state: SortState, column: str) -> str:
    if state.column == column:
        return "fa-sort-up" if state.direction is SortDirection.ASC else "fa-sort-down"
    return "fa-sort"


def sort_class(state: SortState, column: str) -> str:
    if state.column == column:
        return "sorted-asc" if state.direction is SortDirection.ASC else "sorted-desc"
    return ""
