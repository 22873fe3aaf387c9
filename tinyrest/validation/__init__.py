"""Group-aware validation of bound transfer objects."""

from __future__ import annotations

from .constraints import DEFAULT_GROUP, NotBlank, NotNull, Rule
from .validator import ValidatorAdapter, Violation, resolve_groups

__all__ = [
    "DEFAULT_GROUP",
    "NotBlank",
    "NotNull",
    "Rule",
    "ValidatorAdapter",
    "Violation",
    "resolve_groups",
]
