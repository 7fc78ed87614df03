"""
Postboard Backend — Pagination Unit Tests
===========================================

What:  PageRequest.from_query normalization and Pagination.build metadata.
Why:   page/limit come straight from the query string; bad values must fall
       back to defaults instead of failing the request.
"""

import pytest

from postboard.schemas.common import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    PageRequest,
    Pagination,
)


class TestPageRequest:

    def test_defaults(self):
        page = PageRequest.from_query(None, None)
        assert (page.page, page.limit, page.offset) == (DEFAULT_PAGE, DEFAULT_LIMIT, 0)

    def test_offset(self):
        page = PageRequest.from_query("2", "5")
        assert page.offset == 5

    @pytest.mark.parametrize("raw", ["0", "-3", "abc", "", "1.5"])
    def test_invalid_page_falls_back(self, raw):
        assert PageRequest.from_query(raw, "5").page == DEFAULT_PAGE

    @pytest.mark.parametrize("raw", ["0", "-1", "ten"])
    def test_invalid_limit_falls_back(self, raw):
        assert PageRequest.from_query("1", raw).limit == DEFAULT_LIMIT

    def test_limit_capped(self):
        assert PageRequest.from_query("1", "5000").limit == MAX_LIMIT


class TestPagination:

    def test_total_pages_rounds_up(self):
        meta = Pagination.build(PageRequest.from_query("2", "5"), total=12)
        assert meta.total_pages == 3
        assert meta.current_page == 2
        assert meta.per_page == 5
        assert meta.total == 12

    def test_empty(self):
        meta = Pagination.build(PageRequest.from_query(None, None), total=0)
        assert meta.total_pages == 0

    def test_camel_case_on_the_wire(self):
        dumped = Pagination.build(PageRequest.from_query("1", "10"), total=1).model_dump(
            by_alias=True
        )
        assert set(dumped) == {"currentPage", "totalPages", "total", "perPage"}
