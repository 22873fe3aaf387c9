"""Unit tests for page arithmetic."""

from __future__ import annotations

import pytest

from tinyrest import PageOutOfRangeError, PaginationModel
from tinyrest.pagination import Pager, parse_pagination_model
from tinyrest.pagination.adapters import ArrayAdapter


class CountingAdapter(ArrayAdapter):
    """Array adapter recording how often it is queried."""

    def __init__(self, items):
        super().__init__(items)
        self.counts = 0
        self.slices = 0

    def get_nb_results(self) -> int:
        self.counts += 1
        return super().get_nb_results()

    def get_slice(self, offset: int, length: int):
        self.slices += 1
        return super().get_slice(offset, length)


class TestPager:
    def test_current_page_results(self):
        pager = Pager(ArrayAdapter(list(range(1, 26))), max_per_page=10, current_page=3)

        assert pager.current_page_results == [21, 22, 23, 24, 25]
        assert pager.nb_results == 25
        assert pager.nb_pages == 3

    def test_navigation(self):
        pager = Pager(ArrayAdapter(list(range(25))), max_per_page=10, current_page=2)

        assert pager.has_previous_page and pager.has_next_page
        assert (pager.previous_page, pager.next_page) == (1, 3)

    def test_edges_have_no_neighbours(self):
        pager = Pager(ArrayAdapter([1]), max_per_page=10)

        assert pager.previous_page is None
        assert pager.next_page is None

    def test_page_one_of_empty_source_is_valid(self):
        pager = Pager(ArrayAdapter([]), max_per_page=10, current_page=1)

        assert pager.current_page_results == []
        assert pager.nb_pages == 1

    @pytest.mark.parametrize(("size", "page"), [(0, 2), (10, 2), (25, 4)])
    def test_pages_past_the_end_raise(self, size, page):
        pager = Pager(ArrayAdapter(list(range(size))), max_per_page=10, current_page=page)

        with pytest.raises(PageOutOfRangeError) as exc_info:
            pager.current_page_results

        assert exc_info.value.page == page

    def test_count_and_slice_run_once(self):
        adapter = CountingAdapter(list(range(30)))
        pager = Pager(adapter, max_per_page=10, current_page=2)

        pager.current_page_results
        pager.current_page_results
        pager.nb_pages

        assert (adapter.counts, adapter.slices) == (1, 1)

    def test_empty_source_skips_the_slice(self):
        adapter = CountingAdapter([])

        Pager(adapter, max_per_page=5).current_page_results

        assert adapter.slices == 0

    @pytest.mark.parametrize(
        "kwargs", [{"max_per_page": 0}, {"max_per_page": 5, "current_page": 0}]
    )
    def test_rejects_non_positive_bounds(self, kwargs):
        with pytest.raises(ValueError):
            Pager(ArrayAdapter([]), **kwargs)


class TestPaginationModel:
    def test_defaults(self):
        model = PaginationModel()

        assert (model.page, model.page_size, model.offset) == (1, 20, 0)

    def test_values_are_stored_as_integers(self):
        model = PaginationModel(page="2", page_size="15")

        assert (model.page, model.page_size) == (2, 15)
        assert model == PaginationModel(page=2, page_size=15)

    @pytest.mark.parametrize("kwargs", [{"page": 0}, {"page_size": 0}])
    def test_rejects_values_below_one(self, kwargs):
        with pytest.raises(ValueError):
            PaginationModel(**kwargs)

    def test_parse_from_query_arguments(self):
        model = parse_pagination_model({"page": "3", "pageSize": "15", "sort": "title"})

        assert model == PaginationModel(page=3, page_size=15)

    def test_parse_clamps_page_size(self):
        model = parse_pagination_model({"pageSize": "500"}, max_page_size=50)

        assert model.page_size == 50

    def test_parse_uses_default_page_size(self):
        assert parse_pagination_model({}, default_page_size=7).page_size == 7

    def test_parse_custom_parameter_names(self):
        model = parse_pagination_model(
            {"p": "2", "limit": "5"}, page_parameter="p", page_size_parameter="limit"
        )

        assert model == PaginationModel(page=2, page_size=5)

    def test_parse_rejects_invalid_pages(self):
        from marshmallow import ValidationError

        with pytest.raises(ValidationError):
            parse_pagination_model({"page": "0"})
