"""Running validators over form values.

A *rule* is a validator with its argument bound, called as
``rule(value, values)``.  ``combine`` stops at the first failure, the way a
single field's error text is shown; ``validate_fields`` collects every
failure of every field.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from buildpack.errors import ValidationError
from buildpack.validators.results import VALID, Invalid, ValidationResult

Rule = Callable[[Any, Mapping[str, Any]], ValidationResult]


def rule(validator: Callable[..., ValidationResult], *args: Any, **kwargs: Any) -> Rule:
    """Bind *args* and *kwargs* as the validator's rule argument(s).

    Example::

        min_two = rule(has_length_at_least, 2)
        min_two("a", {})  # -> Invalid(...)
    """

    def bound(value: Any, values: Mapping[str, Any]) -> ValidationResult:
        return validator(value, values, *args, **kwargs)

    bound.__name__ = getattr(validator, "__name__", "rule")
    return bound


def combine(*rules: Rule) -> Rule:
    """Chain *rules*; the result is the first failure, or ``Valid``."""

    def combined(value: Any, values: Mapping[str, Any]) -> ValidationResult:
        for check in rules:
            result = check(value, values)
            if isinstance(result, Invalid):
                return result
        return VALID

    return combined


def validate_field(value: Any, values: Mapping[str, Any], rules: Sequence[Rule]) -> list[Invalid]:
    """Return every failure of *rules* for one field, in rule order."""
    results = (check(value, values) for check in rules)
    return [result for result in results if isinstance(result, Invalid)]


def validate_fields(
    values: Mapping[str, Any], field_rules: Mapping[str, Sequence[Rule]]
) -> dict[str, list[Invalid]]:
    """Validate a whole form.

    Returns:
        Mapping of field name to its failures; fields without failures are
        left out, so an empty dict means the form is valid.
    """
    errors: dict[str, list[Invalid]] = {}
    for field_name, rules in field_rules.items():
        failures = validate_field(values.get(field_name), values, rules)
        if failures:
            errors[field_name] = failures
    return errors


def ensure_valid(values: Mapping[str, Any], field_rules: Mapping[str, Sequence[Rule]]) -> None:
    """Like ``validate_fields`` but raise ``ValidationError`` on any failure."""
    errors = validate_fields(values, field_rules)
    if errors:
        raise ValidationError(errors)
