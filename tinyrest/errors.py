"""
Domain-level exceptions raised by binding, validation and pagination.

These exceptions are **framework-agnostic** and never import Flask or HTTP
concepts. They are stable contracts between the binder, the validator adapter,
the pagination layer and their callers.

The translation to HTTP responses (RFC 7807) is handled by
``tinyrest/core/errors.py``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinyrest.validation.validator import Violation


class TinyRestError(Exception):
    """
    Base class for all tinyrest errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - None of them is retried internally.
    """


class TransferObjectDefinitionError(TinyRestError, TypeError):
    """
    Raised while a transfer-object class is being defined with invalid metadata.

    It surfaces at import time, never while handling a request.
    """


class BindingError(TinyRestError):
    """
    Raised when a raw input value cannot be coerced to its declared type.

    :param field: Source parameter name that failed to bind.
    :type field: str
    :param message: Human-readable explanation.
    :type message: str
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(field, message)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        return f"Cannot bind '{self.field}': {self.message}"


class RequestValidationError(TinyRestError):
    """
    Raised when a bound transfer object violates one or more rules.

    :param violations: Every violation collected across all fields.
    :type violations: Sequence[Violation]
    """

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations: list[Violation] = list(violations)
        super().__init__(self.violations)

    def __str__(self) -> str:
        return f"Validation failed with {len(self.violations)} violation(s)"

    def to_list(self) -> list[dict[str, str]]:
        """Return violations as ``[{"field": ..., "message": ...}]``."""
        return [violation.to_dict() for violation in self.violations]


class UnsupportedProviderError(TinyRestError):
    """
    Raised when a data provider of unknown shape reaches the adapter selector.

    :param provider_type: Qualified runtime type name of the provider.
    :type provider_type: str
    """

    def __init__(self, provider_type: str) -> None:
        super().__init__(provider_type)
        self.provider_type = provider_type

    def __str__(self) -> str:
        return f"Unsupportable provider given: {self.provider_type}"


class PageOutOfRangeError(TinyRestError):
    """
    Raised when the requested page lies beyond the last available page.

    :param page: Requested 1-based page.
    :type page: int
    :param nb_pages: Number of pages the source actually has.
    :type nb_pages: int
    """

    def __init__(self, page: int, nb_pages: int) -> None:
        super().__init__(page, nb_pages)
        self.page = page
        self.nb_pages = nb_pages

    def __str__(self) -> str:
        return f"Page {self.page} is out of range (last page is {self.nb_pages})"
