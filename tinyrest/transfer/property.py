"""Field descriptors attached to transfer-object attributes.

A :class:`Property` is pure, immutable metadata: where an attribute's value is
read from in the raw request input (``name``), how it is coerced (``type``),
whether the binder touches it at all (``mapped``) and which validation rules,
tagged with groups, apply to it. Descriptors are resolved once, when the
owning :class:`~tinyrest.transfer.base.TransferObject` subclass is defined.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from tinyrest.errors import TransferObjectDefinitionError
from tinyrest.validation.constraints import Rule


class PropertyType(str, enum.Enum):
    """Semantic type a raw input value is coerced to."""

    SCALAR = "scalar"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class Property:
    """Declarative field descriptor.

    :param name: Source parameter name; defaults to the attribute name.
    :type name: str | None
    :param type: Semantic type (enum member or its string value).
    :type type: PropertyType | str
    :param mapped: ``False`` keeps the binder away from the attribute.
    :type mapped: bool
    :param rules: Validation rules tagged with groups.
    :type rules: Iterable[Rule]
    :param default: Value used when the source key is absent.
    :type default: Any
    :param default_factory: Zero-argument callable building the default.
    :type default_factory: Callable[[], Any] | None
    :param attribute: Owning attribute name, filled at class definition.
    :type attribute: str | None
    """

    name: str | None = None
    type: PropertyType = PropertyType.SCALAR
    mapped: bool = True
    rules: tuple[Rule, ...] = field(default_factory=tuple)
    default: Any = _MISSING
    default_factory: Callable[[], Any] | None = None
    attribute: str | None = None

    def __post_init__(self) -> None:
        raw = self.type.value if isinstance(self.type, PropertyType) else str(self.type).lower()
        try:
            resolved = PropertyType(raw)
        except ValueError:
            raise TransferObjectDefinitionError(
                f"Unknown property type {self.type!r}; "
                f"expected one of {[t.value for t in PropertyType]}"
            ) from None
        object.__setattr__(self, "type", resolved)

        rules = tuple(self.rules) if isinstance(self.rules, Iterable) else None
        if rules is None or not all(isinstance(rule, Rule) for rule in rules):
            raise TransferObjectDefinitionError("Property rules must be Rule instances")
        object.__setattr__(self, "rules", rules)

        if self.default is not _MISSING and self.default_factory is not None:
            raise TransferObjectDefinitionError("Cannot specify both default and default_factory")
        if self.name is not None and not self.name:
            raise TransferObjectDefinitionError("Property name cannot be empty")

    @property
    def source_name(self) -> str:
        """Key looked up in the raw request input."""
        name = self.name or self.attribute
        if name is None:
            raise TransferObjectDefinitionError("Property is not attached to an attribute")
        return name

    def attach(self, attribute: str) -> Property:
        """Return a copy bound to ``attribute``."""
        return replace(self, attribute=attribute)

    def make_default(self) -> Any:
        """Build the value an unbound attribute starts with."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not _MISSING:
            return self.default
        if self.type is PropertyType.ARRAY:
            return []
        return None

