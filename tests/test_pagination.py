# tests/test_pagination.py
"""Unit tests for the in-memory paginator and the Page response builder."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from pydantic import BaseModel

from unit_registry.errors import RecordValidationError
from unit_registry.schemas.common import build_page
from unit_registry.utils.pagination import Paginator


class Item(BaseModel):
    n: int


class TestPaginator:
    @pytest.mark.parametrize("count,size,pages", [(0, 30, 0), (1, 30, 1), (30, 30, 1), (31, 30, 2), (95, 10, 10)])
    def test_total_pages_is_ceiling(self, count, size, pages):
        assert Paginator(range(count), page_size=size).total_pages == pages

    def test_pages_concatenate_to_original(self):
        items = list(range(73))
        paginator = Paginator(items, page_size=30)
        assert [x for page in paginator.pages() for x in page] == items
        assert [len(p) for p in paginator.pages()] == [30, 30, 13]

    def test_go_to_returns_slice(self):
        paginator = Paginator(list(range(73)), page_size=30)
        paginator.go_to(3)
        assert paginator.current_items == list(range(60, 73))

    def test_page_size_change_resets_to_first_page(self):
        paginator = Paginator(list(range(73)), page_size=30)
        paginator.go_to(2)
        paginator.page_size = 10
        assert paginator.current_page == 1

    def test_new_list_of_other_length_resets(self):
        paginator = Paginator(list(range(73)), page_size=30)
        paginator.go_to(2)
        paginator.items = list(range(40))
        assert paginator.current_page == 1

    def test_same_length_list_keeps_page(self):
        paginator = Paginator(list(range(73)), page_size=30)
        paginator.go_to(2)
        paginator.items = list(range(100, 173))
        assert paginator.current_page == 2

    def test_out_of_range(self):
        paginator = Paginator(list(range(5)), page_size=30)
        with pytest.raises(ValueError):
            paginator.go_to(2)
        with pytest.raises(ValueError):
            paginator.go_to(0)

    def test_empty_list_has_page_one(self):
        paginator = Paginator([], page_size=30)
        paginator.go_to(1)
        assert paginator.current_items == []

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            Paginator([1, 2], page_size=0)


class TestBuildPage:
    def test_serialises_current_page(self):
        records = [{"n": i} for i in range(12)]
        page = build_page(records, page=2, page_size=5, schema=Item)
        assert [i.n for i in page.items] == [5, 6, 7, 8, 9]
        assert page.total_items == 12
        assert page.total_pages == 3

    def test_invalid_page_is_validation_error(self):
        with pytest.raises(RecordValidationError):
            build_page([{"n": 1}], page=4, page_size=5, schema=Item)
