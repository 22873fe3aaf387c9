"""One page of items plus the metadata clients need to navigate."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from marshmallow import Schema

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PaginatedCollection(Generic[T]):
    """Snapshot of the current page only.

    :param items: Items of the current page (at most ``page_size``).
    :type items: Sequence[T]
    :param current_page: 1-based page number.
    :type current_page: int
    :param page_size: Requested page size.
    :type page_size: int
    :param total_count: Items available across all pages.
    :type total_count: int
    :param page_url_builder: Page number → URL.
    :type page_url_builder: Callable[[int], str]
    """

    items: Sequence[T]
    current_page: int
    page_size: int
    total_count: int
    page_url_builder: Callable[[int], str]

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def nb_pages(self) -> int:
        return max(1, math.ceil(self.total_count / self.page_size))

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.nb_pages

    def page_url(self, page: int) -> str:
        return self.page_url_builder(page)

    @property
    def links(self) -> dict[str, str]:
        """``self``/``first``/``last`` plus ``prev``/``next`` when they exist."""
        links = {
            "self": self.page_url(self.current_page),
            "first": self.page_url(1),
            "last": self.page_url(self.nb_pages),
        }
        if self.has_previous_page:
            links["prev"] = self.page_url(self.current_page - 1)
        if self.has_next_page:
            links["next"] = self.page_url(self.current_page + 1)
        return links

    def to_dict(self, schema: Schema | None = None) -> dict[str, Any]:
        """Serialize for a JSON body.

        :param schema: Optional marshmallow schema dumping each item.
        :type schema: marshmallow.Schema | None
        :returns: ``items``, ``total``, ``count``, ``page``, ``pageSize`` and ``_links``.
        :rtype: dict[str, Any]
        """
        items = schema.dump(self.items, many=True) if schema is not None else list(self.items)
        return {
            "items": items,
            "total": self.total_count,
            "count": self.count,
            "page": self.current_page,
            "pageSize": self.page_size,
            "_links": self.links,
        }
