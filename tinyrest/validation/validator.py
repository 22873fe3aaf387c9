"""Run group-restricted rules against a bound transfer object."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from marshmallow import ValidationError
from marshmallow.validate import Validator

from tinyrest.transfer.base import TransferObject
from tinyrest.validation.constraints import DEFAULT_GROUP, Rule

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Violation:
    """
    One failed rule.

    :param field: Source name of the offending field.
    :type field: str
    :param message: Client-facing explanation.
    :type message: str
    """

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


def resolve_groups(groups: Iterable[str] | None) -> tuple[str, ...]:
    """Return ``groups`` as a tuple, or the implicit default group when empty."""
    resolved = tuple(groups or ())
    return resolved or (DEFAULT_GROUP,)


def _messages(err: ValidationError) -> list[str]:
    messages: Any = err.messages
    if isinstance(messages, Mapping):
        return [str(m) for value in messages.values() for m in _as_list(value)]
    return [str(m) for m in _as_list(messages)]


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else [value]


class ValidatorAdapter:
    """Evaluate the rules attached to a transfer object's descriptors.

    Only rules tagged with one of the requested groups run. Every field and
    every applicable rule is evaluated, so the returned list is the complete
    violation set for the object.
    """

    def check(self, rule: Rule, value: Any) -> list[str]:
        """Run a single rule and return its failure messages.

        marshmallow validators signal failure by raising
        :class:`marshmallow.ValidationError`; their return value is ignored.
        Plain callables may also return ``False``.
        """
        if value is None and not rule.handles_none:
            return []
        try:
            result = rule.validator(value)
        except ValidationError as err:
            return _messages(err)
        if result is False and not isinstance(rule.validator, Validator):
            return ["This value is not valid."]
        return []

    def validate(
        self, obj: TransferObject, groups: Iterable[str] | None = None
    ) -> list[Violation]:
        """Return every violation of ``obj`` for ``groups``.

        :param obj: Bound transfer object.
        :type obj: TransferObject
        :param groups: Requested groups; ``("Default",)`` when ``None`` or empty.
        :type groups: Iterable[str] | None
        :returns: Ordered violation set, empty on success.
        :rtype: list[Violation]
        """
        active = resolve_groups(groups)
        violations: list[Violation] = []
        for attribute, descriptor in obj.properties().items():
            value = getattr(obj, attribute)
            for rule in descriptor.rules:
                if not rule.applies_to(active):
                    continue
                violations.extend(
                    Violation(field=descriptor.source_name, message=message)
                    for message in self.check(rule, value)
                )

        if violations:
            log.debug(
                "validation.failed",
                extra={
                    "transfer_object": type(obj).__qualname__,
                    "groups": list(active),
                    "violations": len(violations),
                },
            )
        return violations
