"""Group-tagged rules and the validators marshmallow does not ship."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from marshmallow import ValidationError
from marshmallow.validate import Validator

DEFAULT_GROUP = "Default"


class NotBlank(Validator):
    """Reject ``None``, empty strings (after stripping) and empty collections.

    :param error: Error message to raise in case of a validation error.
    """

    default_message = "This value should not be blank."
    handles_none = True

    def __init__(self, *, error: str | None = None) -> None:
        self.error: str = error or self.default_message

    def __call__(self, value: Any) -> Any:
        if value is None:
            raise ValidationError(self.error)
        if isinstance(value, str) and not value.strip():
            raise ValidationError(self.error)
        if isinstance(value, (list, tuple, dict, set)) and not value:
            raise ValidationError(self.error)
        return value


class NotNull(Validator):
    """Reject ``None`` only."""

    default_message = "This value should not be null."
    handles_none = True

    def __init__(self, *, error: str | None = None) -> None:
        self.error: str = error or self.default_message

    def __call__(self, value: Any) -> Any:
        if value is None:
            raise ValidationError(self.error)
        return value


@dataclass(frozen=True, slots=True)
class Rule:
    """A validator callable tagged with the groups that activate it.

    :param validator: Any marshmallow-style validator (raises
        :class:`marshmallow.ValidationError` or returns ``False`` on failure).
    :type validator: Callable[[Any], Any]
    :param groups: Group names; ``("Default",)`` when omitted.
    :type groups: tuple[str, ...]
    """

    validator: Callable[[Any], Any]
    groups: tuple[str, ...] = (DEFAULT_GROUP,)

    def __post_init__(self) -> None:
        groups = (self.groups,) if isinstance(self.groups, str) else tuple(self.groups)
        object.__setattr__(self, "groups", groups or (DEFAULT_GROUP,))

    @property
    def handles_none(self) -> bool:
        """Whether the validator must also run against ``None`` values."""
        return bool(getattr(self.validator, "handles_none", False))

    def applies_to(self, groups: Iterable[str]) -> bool:
        """Return ``True`` when any of ``groups`` activates this rule."""
        return not set(self.groups).isdisjoint(groups)
