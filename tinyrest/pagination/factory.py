"""Produce paginated collections from deferred data providers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from flask import Request, request as flask_request
from sqlalchemy.orm import Session

from tinyrest.core.errors import NotFound
from tinyrest.errors import PageOutOfRangeError
from tinyrest.pagination.adapters import ArrayAdapter, select_adapter
from tinyrest.pagination.collection import PaginatedCollection
from tinyrest.pagination.model import PaginationModel
from tinyrest.pagination.pager import Pager
from tinyrest.pagination.providers import DataProvider, as_data_provider
from tinyrest.pagination.routing import FlaskRouter, PageUrlBuilder, RouteContext, Router

log = logging.getLogger(__name__)


def _current_request() -> Request:
    return flask_request._get_current_object()  # type: ignore[attr-defined]


class PaginationFactory:
    """Turn a pagination model and a data provider into a collection.

    Parameters
    ----------
    router:
        URL generator; :class:`FlaskRouter` by default.
    request_getter:
        Returns the request whose route links point to; the active Flask
        request by default.
    session:
        Session for SQL and native providers; the Flask-SQLAlchemy session
        when omitted.
    page_parameter:
        Query parameter that carries the page number in generated links.
    """

    def __init__(
        self,
        router: Router | None = None,
        *,
        request_getter: Callable[[], Request] = _current_request,
        session: Session | None = None,
        page_parameter: str = "page",
    ) -> None:
        self.router = router or FlaskRouter()
        self.request_getter = request_getter
        self.session = session
        self.page_parameter = page_parameter

    def create_collection(
        self,
        pagination_model: PaginationModel,
        data_provider: DataProvider | Callable[[], Any],
    ) -> PaginatedCollection[Any]:
        """Materialize the requested page of ``data_provider``.

        :param pagination_model: Requested page and page size.
        :type pagination_model: PaginationModel
        :param data_provider: Object with ``provide()`` (or a plain callable)
            returning a list/tuple, ``Select``, ``Query`` or ``NativeQuery``.
        :type data_provider: DataProvider | Callable[[], Any]
        :returns: The current page with navigation links.
        :rtype: PaginatedCollection
        :raises NotFound: When the page lies past the last one.
        :raises UnsupportedProviderError: When the provider shape is unknown.
        """
        adapter = select_adapter(as_data_provider(data_provider).provide(), self.session)
        pager = Pager(
            adapter,
            max_per_page=pagination_model.page_size,
            current_page=pagination_model.page,
        )
        try:
            items = pager.current_page_results
        except PageOutOfRangeError as exc:
            log.info(
                "pagination.page_out_of_range",
                extra={"page": exc.page, "nb_pages": exc.nb_pages},
            )
            raise NotFound(f"Page {exc.page} not found") from exc

        return self._collection(pager, items)

    def create_empty_collection(
        self, pagination_model: PaginationModel | None = None
    ) -> PaginatedCollection[Any]:
        """Return a zero-item collection without touching any data source."""
        page_size = pagination_model.page_size if pagination_model else PaginationModel().page_size
        pager = Pager(ArrayAdapter([]), max_per_page=page_size)
        return self._collection(pager, [])

    def page_url_builder(self) -> PageUrlBuilder:
        """Capture the current route and return its page URL builder."""
        context = RouteContext.from_request(self.request_getter())
        return PageUrlBuilder(self.router, context, page_parameter=self.page_parameter)

    def _collection(self, pager: Pager, items: list[Any]) -> PaginatedCollection[Any]:
        return PaginatedCollection(
            items=items,
            current_page=pager.current_page,
            page_size=pager.max_per_page,
            total_count=pager.nb_results,
            page_url_builder=self.page_url_builder(),
        )


__all__ = ["PaginationFactory"]
