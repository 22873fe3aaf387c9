"""Uniform count/slice adapters, one per provider kind."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Query, Session

from tinyrest.core.extensions import get_session
from tinyrest.pagination.providers import NativeQuery, ProviderKind, provider_kind

log = logging.getLogger(__name__)


class PaginationAdapter(Protocol):
    """Count and slice operations the pager relies on."""

    def get_nb_results(self) -> int: ...

    def get_slice(self, offset: int, length: int) -> list[Any]: ...


class _SessionBound:
    """Resolve an injected session, else the Flask-scoped one."""

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return get_session()


# ------------------------------ In-memory -----------------------------------


class ArrayAdapter:
    """Slice an in-memory sequence by offset."""

    def __init__(self, items: Sequence[Any]) -> None:
        self.items = items

    def get_nb_results(self) -> int:
        return len(self.items)

    def get_slice(self, offset: int, length: int) -> list[Any]:
        return list(self.items[offset : offset + length])


# --------------------------------- SQL --------------------------------------


def count_statement(stmt: Select[Any]) -> Select[Any]:
    """Derive ``SELECT count(*) AS total_count FROM (<stmt>) AS tmp``.

    The statement's ``ORDER BY`` is stripped inside the subquery. SQLAlchemy
    statements are generative, so ``stmt`` itself is left untouched.

    :param stmt: Row-producing select.
    :type stmt: :class:`sqlalchemy.sql.Select`
    :returns: New counting select.
    :rtype: :class:`sqlalchemy.sql.Select`
    """
    return select(func.count().label("total_count")).select_from(
        stmt.order_by(None).subquery("tmp")
    )


def _is_entity_select(stmt: Select[Any]) -> bool:
    """Whether ``stmt`` selects exactly one mapped entity (``select(Model)``)."""
    descriptions = stmt.column_descriptions
    if len(descriptions) != 1:
        return False
    entity = descriptions[0].get("entity")
    return entity is not None and descriptions[0].get("type") is entity


class SelectAdapter(_SessionBound):
    """Paginate a SQLAlchemy ``Select``.

    Single-entity selects yield mapped instances; any other select yields one
    ``dict`` per row keyed by column label.
    """

    def __init__(
        self,
        stmt: Select[Any],
        session: Session | None = None,
        *,
        count_builder: Callable[[Select[Any]], Select[Any]] = count_statement,
    ) -> None:
        super().__init__(session)
        self.stmt = stmt
        self.count_builder = count_builder

    def get_nb_results(self) -> int:
        total = self.session.execute(self.count_builder(self.stmt)).scalar_one_or_none()
        return int(total or 0)

    def get_slice(self, offset: int, length: int) -> list[Any]:
        result = self.session.execute(self.stmt.limit(length).offset(offset))
        if _is_entity_select(self.stmt):
            # Joined eager loads of collections repeat the parent row
            return list(result.unique().scalars().all())
        return [dict(row) for row in result.mappings().all()]


# --------------------------------- ORM --------------------------------------


class QueryAdapter:
    """Paginate a legacy ORM ``Query``; counting is left to ``Query.count``."""

    def __init__(self, query: Query[Any]) -> None:
        self.query = query

    def get_nb_results(self) -> int:
        return int(self.query.order_by(None).count())

    def get_slice(self, offset: int, length: int) -> list[Any]:
        return list(self.query.limit(length).offset(offset).all())


# ------------------------------- Native -------------------------------------


class NativeQueryAdapter(_SessionBound):
    """Paginate raw SQL with the caller-supplied count SQL."""

    def __init__(self, query: NativeQuery, session: Session | None = None) -> None:
        super().__init__(session)
        self.query = query

    def get_nb_results(self) -> int:
        total = self.session.execute(
            self.query.count_statement(), dict(self.query.params)
        ).scalar_one_or_none()
        return int(total or 0)

    def get_slice(self, offset: int, length: int) -> list[Any]:
        params: dict[str, Any] = {**self.query.params, "limit": length, "offset": offset}
        result = self.session.execute(self.query.page_statement(), params)
        return [dict(row) for row in result.mappings().all()]


# ------------------------------ Selection -----------------------------------

AdapterBuilder = Callable[[Any, "Session | None"], PaginationAdapter]

ADAPTERS: Mapping[ProviderKind, AdapterBuilder] = {
    ProviderKind.SQL: lambda provider, session: SelectAdapter(provider, session),
    ProviderKind.ORM: lambda provider, session: QueryAdapter(provider),
    ProviderKind.ARRAY: lambda provider, session: ArrayAdapter(provider),
    ProviderKind.NATIVE: lambda provider, session: NativeQueryAdapter(provider, session),
}


def select_adapter(provider: Any, session: Session | None = None) -> PaginationAdapter:
    """Wrap ``provider`` in the adapter matching its kind.

    :param provider: Value returned by a data provider's ``provide()``.
    :type provider: Any
    :param session: Session for SQL and native providers; defaults to the
        Flask-SQLAlchemy session.
    :type session: :class:`sqlalchemy.orm.Session` | None
    :returns: Adapter exposing count and slice operations.
    :rtype: PaginationAdapter
    :raises UnsupportedProviderError: When the provider matches no kind.
    """
    kind = provider_kind(provider)
    adapter = ADAPTERS[kind](provider, session)
    log.debug(
        "pagination.adapter_selected",
        extra={"provider": kind.value, "adapter": type(adapter).__name__},
    )
    return adapter
