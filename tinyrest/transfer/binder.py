"""Populate transfer objects from raw request parameters."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from marshmallow import ValidationError, fields

from tinyrest.errors import BindingError
from tinyrest.transfer.base import TransferObject
from tinyrest.transfer.property import Property, PropertyType

log = logging.getLogger(__name__)

T = TypeVar("T", bound=TransferObject)

# One deserializing field per semantic type. Explicit nulls stay ``None``
# except for arrays, which must receive a sequence.
_COERCERS: Mapping[PropertyType, fields.Field] = {
    PropertyType.SCALAR: fields.Raw(allow_none=True),
    PropertyType.ARRAY: fields.List(fields.Raw(allow_none=True), allow_none=False),
    PropertyType.STRING: fields.String(allow_none=True),
    PropertyType.INTEGER: fields.Integer(allow_none=True),
    PropertyType.FLOAT: fields.Float(allow_none=True),
    PropertyType.BOOLEAN: fields.Boolean(allow_none=True),
}


def _first_message(err: ValidationError) -> str:
    messages: Any = err.messages
    # Nested fields report ``{index: [messages]}``; descend to the first leaf
    while isinstance(messages, (Mapping, list)) and messages:
        messages = next(iter(messages.values())) if isinstance(messages, Mapping) else messages[0]
    return str(messages)


class Binder:
    """Apply a transfer object's descriptors to a raw parameter mapping.

    Responsibilities
    ----------------
    * Read only ``mapped`` descriptors, by their source name.
    * Leave absent keys at the descriptor default.
    * Coerce present values through marshmallow fields, failing fast with
      :class:`~tinyrest.errors.BindingError`.
    """

    def coerce(self, descriptor: Property, raw: Any) -> Any:
        """Coerce ``raw`` to the descriptor's declared type.

        :param descriptor: Field descriptor driving the coercion.
        :type descriptor: Property
        :param raw: Raw input value.
        :type raw: Any
        :returns: Coerced value.
        :rtype: Any
        :raises BindingError: When the value does not fit the declared type.
        """
        try:
            return _COERCERS[descriptor.type].deserialize(raw)
        except ValidationError as err:
            raise BindingError(descriptor.source_name, _first_message(err)) from err

    def bind(self, data: Mapping[str, Any], target: T) -> T:
        """Populate ``target`` in place from ``data`` and return it.

        :param data: Flat, string-keyed raw input.
        :type data: Mapping[str, Any]
        :param target: Fresh transfer-object instance.
        :type target: TransferObject
        :returns: The populated instance.
        :rtype: TransferObject
        :raises BindingError: On the first value that cannot be coerced.
        """
        for attribute, descriptor in target.properties().items():
            if not descriptor.mapped:
                continue
            source = descriptor.source_name
            if source not in data:
                continue
            try:
                value = self.coerce(descriptor, data[source])
            except BindingError as err:
                log.info(
                    "binding.failed",
                    extra={"transfer_object": type(target).__qualname__, "field": err.field},
                )
                raise
            setattr(target, attribute, value)
        return target
