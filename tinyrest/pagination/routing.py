"""Route context capture and page URL building."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from flask import Request, url_for


class Router(Protocol):
    """URL generation collaborator."""

    def generate(self, route_name: str, params: Mapping[str, Any]) -> str: ...


class FlaskRouter:
    """Generate URLs through :func:`flask.url_for`.

    :param absolute: Build ``scheme://host/...`` URLs instead of paths.
    :type absolute: bool
    """

    def __init__(self, *, absolute: bool = False) -> None:
        self.absolute = absolute

    def generate(self, route_name: str, params: Mapping[str, Any]) -> str:
        return url_for(route_name, _external=self.absolute, **params)


@dataclass(frozen=True, slots=True)
class RouteContext:
    """Snapshot of the route that produced a collection.

    :param route_name: Endpoint name of the current request.
    :param route_params: Path parameters the route was matched with.
    :param query_params: Query-string parameters (lists for repeated keys).
    """

    route_name: str
    route_params: Mapping[str, Any] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_request(cls, request: Request) -> RouteContext:
        if request.endpoint is None:
            raise RuntimeError(f"Request to '{request.path}' matched no route")
        query = {
            key: values if len(values) > 1 else values[0]
            for key, values in request.args.lists()
        }
        return cls(
            route_name=request.endpoint,
            route_params=MappingProxyType(dict(request.view_args or {})),
            query_params=MappingProxyType(query),
        )


class PageUrlBuilder:
    """Build the URL of any page of the route captured in a context.

    Route parameters are merged with query parameters (query wins), any
    existing page parameter is dropped and the requested page re-inserted.
    Calling the builder has no effect beyond URL generation.
    """

    def __init__(
        self, router: Router, context: RouteContext, *, page_parameter: str = "page"
    ) -> None:
        self.router = router
        self.context = context
        self.page_parameter = page_parameter
        params = {**context.route_params, **context.query_params}
        params.pop(page_parameter, None)
        self._base_params: Mapping[str, Any] = MappingProxyType(params)

    def __call__(self, page: int) -> str:
        params = {**self._base_params, self.page_parameter: int(page)}
        return self.router.generate(self.context.route_name, params)
