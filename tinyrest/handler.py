"""Bind → validate → decide, for one request at a time."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar, overload

from flask import Request

from tinyrest.errors import RequestValidationError
from tinyrest.transfer.base import TransferObject
from tinyrest.transfer.binder import Binder
from tinyrest.transfer.input import request_data
from tinyrest.validation.validator import ValidatorAdapter, resolve_groups

log = logging.getLogger(__name__)

T = TypeVar("T", bound=TransferObject)


class RequestHandler:
    """Turn a request into a validated transfer object.

    Validation groups resolve, in order, from the ``groups`` argument of
    :meth:`handle_transfer_object`, the groups stored with
    :meth:`set_validation_groups`, and finally the ``Default`` group. Passing
    ``groups`` per call keeps a shared handler free of cross-request state.
    """

    def __init__(
        self,
        *,
        binder: Binder | None = None,
        validator: ValidatorAdapter | None = None,
        validation_groups: Iterable[str] | None = None,
    ) -> None:
        self.binder = binder or Binder()
        self.validator = validator or ValidatorAdapter()
        self._validation_groups: tuple[str, ...] | None = (
            tuple(validation_groups) if validation_groups else None
        )

    @property
    def validation_groups(self) -> tuple[str, ...]:
        return resolve_groups(self._validation_groups)

    def set_validation_groups(self, groups: Iterable[str]) -> RequestHandler:
        """Store the groups used when a call does not pass its own."""
        self._validation_groups = tuple(groups) or None
        return self

    @overload
    def handle_transfer_object(
        self,
        request: Request | Mapping[str, Any],
        transfer_object: type[T],
        groups: Iterable[str] | None = ...,
    ) -> T: ...

    @overload
    def handle_transfer_object(
        self,
        request: Request | Mapping[str, Any],
        transfer_object: T,
        groups: Iterable[str] | None = ...,
    ) -> T: ...

    def handle_transfer_object(self, request, transfer_object, groups=None):
        """Bind ``request`` into ``transfer_object`` and validate it.

        :param request: Flask request, or a flat mapping of raw parameters.
        :type request: flask.Request | Mapping[str, Any]
        :param transfer_object: Transfer-object class (instantiated fresh) or
            instance (populated in place).
        :type transfer_object: type[TransferObject] | TransferObject
        :param groups: Validation groups for this call only.
        :type groups: Iterable[str] | None
        :returns: The validated transfer object.
        :rtype: TransferObject
        :raises BindingError: When a value cannot be coerced (not validated further).
        :raises RequestValidationError: When any active rule is violated.
        """
        target = transfer_object() if isinstance(transfer_object, type) else transfer_object
        self.binder.bind(request_data(request), target)

        active = resolve_groups(groups if groups else self._validation_groups)
        violations = self.validator.validate(target, active)
        if violations:
            log.info(
                "transfer_object.invalid",
                extra={
                    "transfer_object": type(target).__qualname__,
                    "groups": list(active),
                    "violations": len(violations),
                },
            )
            raise RequestValidationError(violations)
        return target
