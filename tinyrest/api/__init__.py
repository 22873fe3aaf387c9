"""Helpers for Flask views consuming tinyrest."""

from __future__ import annotations

from .deps import (
    bind_transfer_object,
    json_response,
    paginated_response,
    parse_pagination,
    timing,
)

__all__ = [
    "bind_transfer_object",
    "json_response",
    "paginated_response",
    "parse_pagination",
    "timing",
]
