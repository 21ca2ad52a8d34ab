"""Page windows over a loaded list"""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

# Page-number strip shows this many pages at a time
WINDOW_SIZE = 5


def page_count(total: int, size: int) -> int:
    if size <= 0:
        raise ValueError("Page size must be greater than 0")
    return math.ceil(max(total, 0) / size)


def paginate(rows: Sequence[T], size: int, page: int) -> list[T]:
    """Return the 1-based ``page`` of ``rows``, clamped to the collection bounds"""
    if size <= 0:
        raise ValueError("Page size must be greater than 0")
    if page < 1:
        raise ValueError("Page number must be 1 or greater")
    start = (page - 1) * size
    return list(rows[start : start + size])


class Pager:
    """
    Current page of a list with navigation helpers.

    Moving before page 1 or past the last page leaves the page unchanged.
    """

    def __init__(self, page_size: int, total: int = 0, page: int = 1):
        if page_size <= 0:
            raise ValueError("Page size must be greater than 0")
        self.page_size = page_size
        self.total = max(total, 0)
        self.page = 1
        self.window_index = 0
        self.go_to(page)

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.page_size)

    @property
    def start_record(self) -> int:
        if self.total == 0:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def end_record(self) -> int:
        return min(self.page * self.page_size, self.total)

    @property
    def window(self) -> list[int]:
        """Page numbers shown in the pagination strip"""
        first = self.window_index * WINDOW_SIZE + 1
        last = min(first + WINDOW_SIZE - 1, self.page_count)
        return list(range(first, last + 1))

    def reset(self, total: int) -> None:
        """New collection: back to page 1"""
        self.total = max(total, 0)
        self.page = 1
        self.window_index = 0

    def go_to(self, page: int) -> bool:
        if page < 1 or page > max(self.page_count, 1):
            return False
        self.page = page
        self.window_index = (page - 1) // WINDOW_SIZE
        return True

    def next(self) -> bool:
        return self.go_to(self.page + 1)

    def previous(self) -> bool:
        return self.go_to(self.page - 1)

    def shift_window(self, groups: int) -> bool:
        """Move the strip by ``groups`` windows and jump to its first page"""
        return self.go_to((self.window_index + groups) * WINDOW_SIZE + 1)

    def slice(self, rows: Sequence[T]) -> list[T]:
        return paginate(rows, self.page_size, self.page)
