"""Tagged validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Valid:
    """The value passed the rule."""

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """The value failed the rule.

    Attributes:
        message: Human-readable message, shown when no translation exists.
        message_id: Translation key for the UI layer.
        value: Optional argument for message interpolation (e.g. a length).
    """

    message: str
    message_id: str = "validation.invalid"
    value: Any = field(default=None)

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = Union[Valid, Invalid]

VALID = Valid()
