"""Pagination input: value object and its query-string schema."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate


@dataclass(frozen=True, slots=True)
class PaginationModel:
    """Requested page.

    :param page: 1-based page number (``>= 1``).
    :type page: int
    :param page_size: Page size (``>= 1``).
    :type page_size: int
    :raises ValueError: When either value is lower than 1.
    """

    page: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        for name in ("page", "page_size"):
            value = int(getattr(self, name))
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
            object.__setattr__(self, name, value)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PaginationQuerySchema(Schema):
    """Validate pagination parameters with configurable defaults.

    Unknown query parameters (filters, sort tokens, ...) are ignored.
    """

    class Meta:
        unknown = EXCLUDE

    def __init__(
        self,
        *,
        default_page_size: int = 20,
        max_page_size: int = 200,
        page_parameter: str = "page",
        page_size_parameter: str = "pageSize",
        **kwargs: Any,
    ) -> None:
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size
        super().__init__(**kwargs)
        # Declared fields are copied per instance, so renaming stays local
        self.fields["page"].data_key = page_parameter
        self.fields["page_size"].data_key = page_size_parameter

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    page_size = fields.Integer(data_key="pageSize", validate=validate.Range(min=1))

    @post_load
    def make_model(self, data: dict[str, Any], **_: Any) -> PaginationModel:
        page_size = data.get("page_size", self._default_page_size)
        page_size = min(max(page_size, 1), self._max_page_size)
        return PaginationModel(page=data.get("page", 1), page_size=page_size)


def parse_pagination_model(
    args: Mapping[str, Any],
    *,
    default_page_size: int = 20,
    max_page_size: int = 200,
    page_parameter: str = "page",
    page_size_parameter: str = "pageSize",
) -> PaginationModel:
    """Load a :class:`PaginationModel` from query arguments.

    :raises marshmallow.ValidationError: When a parameter is not a positive integer.
    """
    schema = PaginationQuerySchema(
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        page_parameter=page_parameter,
        page_size_parameter=page_size_parameter,
    )
    return schema.load(args)
