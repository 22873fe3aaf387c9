"""Transfer-object base class with a definition-time descriptor table."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from tinyrest.errors import TransferObjectDefinitionError
from tinyrest.transfer.property import Property


class TransferObject:
    """Plain data holder describing one request's expected input.

    Subclasses declare their fields with :class:`Property`::

        class PersonIn(TransferObject):
            first_name = Property("firstName", rules=[Rule(NotBlank())])
            tags = Property(type=PropertyType.ARRAY)

    The declarations are collected into :attr:`__properties__` once, when the
    subclass is created, and removed from the class namespace so instances
    only ever expose plain values.
    """

    __properties__: ClassVar[Mapping[str, Property]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        table: dict[str, Property] = dict(cls.__properties__)
        for attribute, value in list(vars(cls).items()):
            if isinstance(value, Property):
                table[attribute] = value.attach(attribute)
                delattr(cls, attribute)

        seen: dict[str, str] = {}
        for attribute, descriptor in table.items():
            if not descriptor.mapped:
                continue
            other = seen.setdefault(descriptor.source_name, attribute)
            if other != attribute:
                raise TransferObjectDefinitionError(
                    f"{cls.__qualname__}: '{attribute}' and '{other}' both read "
                    f"'{descriptor.source_name}'"
                )

        cls.__properties__ = MappingProxyType(table)

    def __init__(self, **values: Any) -> None:
        properties = type(self).__properties__
        unknown = set(values) - set(properties)
        if unknown:
            raise TypeError(f"{type(self).__qualname__} got unknown fields: {sorted(unknown)}")
        for attribute, descriptor in properties.items():
            value = values[attribute] if attribute in values else descriptor.make_default()
            setattr(self, attribute, value)

    @classmethod
    def properties(cls) -> Mapping[str, Property]:
        """Return the read-only ``attribute -> descriptor`` table."""
        return cls.__properties__

    def to_dict(self) -> dict[str, Any]:
        """Serialize mapped fields keyed by their source names."""
        return {
            descriptor.source_name: getattr(self, attribute)
            for attribute, descriptor in type(self).__properties__.items()
            if descriptor.mapped
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.__dict__ == other.__dict__

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__properties__)
        return f"{type(self).__qualname__}({fields})"
