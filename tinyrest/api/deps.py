"""Flask view helpers built on the request handler and pagination factory."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from marshmallow import Schema

from tinyrest.factory import get_request_handler
from tinyrest.pagination.collection import PaginatedCollection
from tinyrest.pagination.model import PaginationModel, parse_pagination_model
from tinyrest.transfer.base import TransferObject

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def parse_pagination(
    default_page_size: int | None = None, max_page_size: int | None = None
) -> PaginationModel:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    config = current_app.config
    return parse_pagination_model(
        request.args,
        default_page_size=default_page_size or config["TINYREST_DEFAULT_PAGE_SIZE"],
        max_page_size=max_page_size or config["TINYREST_MAX_PAGE_SIZE"],
        page_parameter=config["TINYREST_PAGE_PARAMETER"],
        page_size_parameter=config["TINYREST_PAGE_SIZE_PARAMETER"],
    )


def bind_transfer_object(
    transfer_object: type[TransferObject],
    *,
    groups: Iterable[str] | None = None,
    arg_name: str = "payload",
) -> Callable[[F], F]:
    """Bind and validate ``transfer_object`` and pass it to the view.

    The validated instance is injected as the ``arg_name`` keyword argument.
    Binding and validation failures propagate to the registered error
    handlers (400 and 422 respectively).
    """

    frozen_groups = tuple(groups) if groups else None

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            handler = get_request_handler()
            kwargs[arg_name] = handler.handle_transfer_object(
                request, transfer_object, groups=frozen_groups
            )
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def paginated_response(
    collection: PaginatedCollection[Any], schema: Schema | None = None, *, status: int = 200
) -> Response:
    """Return ``collection`` as JSON with a ``Link`` header for navigation."""

    response = json_response(collection.to_dict(schema), status=status)
    response.headers["Link"] = ", ".join(
        f'<{url}>; rel="{rel}"' for rel, url in collection.links.items()
    )
    response.headers["X-Total-Count"] = str(collection.total_count)
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            log.debug(
                "view.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
