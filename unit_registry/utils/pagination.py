# unit_registry/utils/pagination.py
"""
In-memory pagination over an already filtered, ordered list.
Pages are 1-based. Changing the page size, or swapping in a list of a
different length, puts the viewer back on page 1.
"""

import math
from typing import Generic, Iterator, List, Sequence, TypeVar

T = TypeVar("T")


class Paginator(Generic[T]):
    def __init__(self, items: Sequence[T], page_size: int = 30):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._items: List[T] = list(items)
        self._page_size = page_size
        self._page = 1

    @property
    def items(self) -> List[T]:
        return self._items

    @items.setter
    def items(self, items: Sequence[T]):
        items = list(items)
        if len(items) != len(self._items):
            self._page = 1
        self._items = items

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, page_size: int):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self._page_size = page_size
        self._page = 1

    @property
    def total_items(self) -> int:
        return len(self._items)

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self._items) / self._page_size)

    @property
    def current_page(self) -> int:
        return self._page

    @property
    def current_items(self) -> List[T]:
        start = (self._page - 1) * self._page_size
        return self._items[start:start + self._page_size]

    def go_to(self, page: int):
        # page 1 stays valid on an empty list
        if page < 1 or page > max(self.total_pages, 1):
            raise ValueError(f"Page {page} out of range (1..{max(self.total_pages, 1)})")
        self._page = page

    def pages(self) -> Iterator[List[T]]:
        for start in range(0, len(self._items), self._page_size):
            yield self._items[start:start + self._page_size]
