"""Data providers and their classification into provider kinds.

A *provider* is the opaque handle a data source hands over for pagination.
Four kinds are supported and each maps to exactly one adapter:

* :attr:`ProviderKind.SQL`: a SQLAlchemy :class:`~sqlalchemy.sql.Select`.
* :attr:`ProviderKind.ORM`: a legacy SQLAlchemy :class:`~sqlalchemy.orm.Query`.
* :attr:`ProviderKind.ARRAY`: an in-memory ``list`` or ``tuple``.
* :attr:`ProviderKind.NATIVE`: a :class:`NativeQuery` (raw SQL plus the
  caller's own count SQL).
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import Select, TextClause, text
from sqlalchemy.orm import Query

from tinyrest.errors import UnsupportedProviderError


class ProviderKind(enum.Enum):
    """Closed set of supported provider shapes."""

    SQL = "sql"
    ORM = "orm"
    ARRAY = "array"
    NATIVE = "native"


@dataclass(frozen=True, slots=True)
class NativeQuery:
    """Raw SQL query paired with the query counting its rows.

    ``sql`` must not carry its own ``LIMIT``/``OFFSET``: the adapter appends
    ``LIMIT :limit OFFSET :offset`` bound parameters.

    :param sql: Row-producing SQL.
    :type sql: str | TextClause
    :param count_sql: SQL returning the total row count as a single scalar.
    :type count_sql: str | TextClause
    :param params: Bound parameters shared by both statements.
    :type params: Mapping[str, Any]
    """

    sql: str | TextClause
    count_sql: str | TextClause
    params: Mapping[str, Any] = field(default_factory=dict)

    @staticmethod
    def _as_text(sql: str | TextClause) -> TextClause:
        return sql if isinstance(sql, TextClause) else text(sql)

    def page_statement(self) -> TextClause:
        """Return ``sql`` with ``LIMIT :limit OFFSET :offset`` appended.

        Values already bound on a :class:`~sqlalchemy.sql.expression.TextClause`
        (``text(...).bindparams(...)``) are carried over to the new statement.
        """
        base = str(self.sql).rstrip().rstrip(";")
        statement = text(f"{base} LIMIT :limit OFFSET :offset")
        if isinstance(self.sql, TextClause):
            statement = statement.bindparams(*self.sql._bindparams.values())
        return statement

    def count_statement(self) -> TextClause:
        return self._as_text(self.count_sql)


@runtime_checkable
class DataProvider(Protocol):
    """Deferred source: nothing is materialized until :meth:`provide` runs."""

    def provide(self) -> Any: ...


class CallableProvider:
    """Adapt a zero-argument callable to :class:`DataProvider`."""

    def __init__(self, factory: Callable[[], Any]) -> None:
        self._factory = factory

    def provide(self) -> Any:
        return self._factory()


def as_data_provider(source: DataProvider | Callable[[], Any]) -> DataProvider:
    """Return ``source`` as a :class:`DataProvider`, wrapping plain callables."""
    if isinstance(source, DataProvider):
        return source
    if callable(source):
        return CallableProvider(source)
    raise TypeError(f"Expected a data provider or callable, got {type(source).__qualname__}")


def provider_kind(provider: Any) -> ProviderKind:
    """Classify ``provider`` into its :class:`ProviderKind`.

    :raises UnsupportedProviderError: When ``provider`` matches no kind.
    """
    if isinstance(provider, Select):
        return ProviderKind.SQL
    if isinstance(provider, Query):
        return ProviderKind.ORM
    if isinstance(provider, (list, tuple)):
        return ProviderKind.ARRAY
    if isinstance(provider, NativeQuery):
        return ProviderKind.NATIVE
    raise UnsupportedProviderError(f"{type(provider).__module__}.{type(provider).__qualname__}")
