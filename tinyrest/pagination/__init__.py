"""Adapter-based pagination with page-aware navigation links."""

from __future__ import annotations

from .adapters import (
    ArrayAdapter,
    NativeQueryAdapter,
    QueryAdapter,
    SelectAdapter,
    count_statement,
    select_adapter,
)
from .collection import PaginatedCollection
from .factory import PaginationFactory
from .model import PaginationModel, PaginationQuerySchema, parse_pagination_model
from .pager import Pager
from .providers import DataProvider, NativeQuery, ProviderKind, provider_kind
from .routing import FlaskRouter, PageUrlBuilder, RouteContext, Router

__all__ = [
    "ArrayAdapter",
    "DataProvider",
    "FlaskRouter",
    "NativeQuery",
    "NativeQueryAdapter",
    "PageUrlBuilder",
    "PaginatedCollection",
    "PaginationFactory",
    "PaginationModel",
    "PaginationQuerySchema",
    "Pager",
    "ProviderKind",
    "QueryAdapter",
    "RouteContext",
    "Router",
    "SelectAdapter",
    "count_statement",
    "parse_pagination_model",
    "provider_kind",
    "select_adapter",
]
