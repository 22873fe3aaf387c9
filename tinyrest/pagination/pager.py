"""Page arithmetic over a pagination adapter."""

from __future__ import annotations

import math
from typing import Any

from tinyrest.errors import PageOutOfRangeError
from tinyrest.pagination.adapters import PaginationAdapter


class Pager:
    """Lazily count and slice one page of an adapter.

    Both the count and the slice run at most once and only on first access.
    Page 1 always exists, even for an empty source; any page past
    :attr:`nb_pages` raises :class:`~tinyrest.errors.PageOutOfRangeError`.
    """

    def __init__(
        self, adapter: PaginationAdapter, *, max_per_page: int, current_page: int = 1
    ) -> None:
        if max_per_page < 1:
            raise ValueError(f"max_per_page must be >= 1, got {max_per_page}")
        if current_page < 1:
            raise ValueError(f"current_page must be >= 1, got {current_page}")
        self.adapter = adapter
        self.max_per_page = int(max_per_page)
        self.current_page = int(current_page)
        self._nb_results: int | None = None
        self._results: list[Any] | None = None

    @property
    def nb_results(self) -> int:
        if self._nb_results is None:
            self._nb_results = self.adapter.get_nb_results()
        return self._nb_results

    @property
    def nb_pages(self) -> int:
        return max(1, math.ceil(self.nb_results / self.max_per_page))

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.max_per_page

    @property
    def current_page_results(self) -> list[Any]:
        """Materialize the current page.

        :raises PageOutOfRangeError: When the page lies past the last one.
        """
        if self._results is None:
            if self.current_page > self.nb_pages:
                raise PageOutOfRangeError(page=self.current_page, nb_pages=self.nb_pages)
            if self.nb_results == 0:
                self._results = []
            else:
                self._results = self.adapter.get_slice(self.offset, self.max_per_page)
        return self._results

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.nb_pages

    @property
    def previous_page(self) -> int | None:
        return self.current_page - 1 if self.has_previous_page else None

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.has_next_page else None
