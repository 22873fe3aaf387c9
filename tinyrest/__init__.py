"""Request binding, group-aware validation and link-aware pagination for Flask.

Expose the main entry points at package level so callers can
``from tinyrest import RequestHandler, PaginationFactory`` without traversing
the package structure.
"""

from __future__ import annotations

# validation first: transfer descriptors import its constraints
from .validation import NotBlank, NotNull, Rule, ValidatorAdapter, Violation
from .transfer import Binder, Property, PropertyType, TransferObject
from .errors import (
    BindingError,
    PageOutOfRangeError,
    RequestValidationError,
    TinyRestError,
    TransferObjectDefinitionError,
    UnsupportedProviderError,
)
from .handler import RequestHandler
from .pagination import NativeQuery, PaginatedCollection, PaginationFactory, PaginationModel
from .factory import create_app, get_pagination_factory, get_request_handler, init_app

__all__ = [
    "Binder",
    "BindingError",
    "NativeQuery",
    "NotBlank",
    "NotNull",
    "PageOutOfRangeError",
    "PaginatedCollection",
    "PaginationFactory",
    "PaginationModel",
    "Property",
    "PropertyType",
    "RequestHandler",
    "RequestValidationError",
    "Rule",
    "TinyRestError",
    "TransferObject",
    "TransferObjectDefinitionError",
    "UnsupportedProviderError",
    "ValidatorAdapter",
    "Violation",
    "create_app",
    "get_pagination_factory",
    "get_request_handler",
    "init_app",
]
