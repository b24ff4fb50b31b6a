"""Form field validators for the storefront.

Every validator has the form-framework signature
``(value, values, argument) -> Valid | Invalid``: ``value`` is the field
being checked, ``values`` holds all fields of the form, and ``argument`` is
the rule's parameter.  Validators are pure and never raise.
"""

from __future__ import annotations

import re
import string
from collections.abc import Iterable, Mapping
from typing import Any

from buildpack.validators.results import VALID, Invalid, ValidationResult

# dot-atom or quoted-string local part, hostname-like domain.  Underscores
# are tolerated in domain labels since real mail servers accept them.
_ATEXT = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]"
_LOCAL_PART = rf'(?:{_ATEXT}+(?:\.{_ATEXT}+)*|"(?:[^"\\\r\n]|\\.)*")'
_DOMAIN_LABEL = r"[A-Za-z0-9_](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9_])?"
_DOMAIN = rf"{_DOMAIN_LABEL}(?:\.{_DOMAIN_LABEL})*"
EMAIL_PATTERN = re.compile(rf"(?P<local>{_LOCAL_PART})@(?P<domain>{_DOMAIN})")

MAX_EMAIL_LENGTH = 254
MAX_LOCAL_PART_LENGTH = 64

_PASSWORD_CLASSES = ("lower", "upper", "digit", "special")


def _length(value: Any) -> int:
    try:
        return len(value)
    except TypeError:
        return len(str(value))


def has_length_at_least(
    value: Any, values: Mapping[str, Any] | None, minimum_length: int
) -> ValidationResult:
    if not value or _length(value) < minimum_length:
        return Invalid(
            f"Must contain at least {minimum_length} character(s).",
            "validation.mustBeAtLeastLong",
            minimum_length,
        )
    return VALID


def has_length_at_most(
    value: Any, values: Mapping[str, Any] | None, maximum_length: int
) -> ValidationResult:
    if value and _length(value) > maximum_length:
        return Invalid(
            f"Must not exceed {maximum_length} character(s).",
            "validation.mustBeAtMostLong",
            maximum_length,
        )
    return VALID


def has_length_exactly(
    value: Any, values: Mapping[str, Any] | None, length: int
) -> ValidationResult:
    if value and _length(value) != length:
        return Invalid(
            f"Must contain exactly {length} character(s).",
            "validation.mustBeExactlyLong",
            length,
        )
    return VALID


def is_required(value: Any = None, values: Mapping[str, Any] | None = None) -> ValidationResult:
    """Reject missing, false, empty, and whitespace-only values.

    ``0`` counts as missing, matching how the form framework treats falsy
    input.
    """
    if not value or (isinstance(value, str) and not value.strip()):
        return Invalid("Is required.", "validation.isRequired")
    return VALID


def must_be_checked(value: Any = None, values: Mapping[str, Any] | None = None) -> ValidationResult:
    if not value:
        return Invalid("Must be checked.", "validation.mustBeChecked")
    return VALID


def is_equal_to_field(
    value: Any, values: Mapping[str, Any] | None, field_key: str
) -> ValidationResult:
    if value != (values or {}).get(field_key):
        return Invalid(f"{field_key} must match.", "validation.isEqualToField", field_key)
    return VALID


def is_not_equal_to_field(
    value: Any, values: Mapping[str, Any] | None, field_key: str
) -> ValidationResult:
    if value == (values or {}).get(field_key):
        return Invalid(f"{field_key} must be different", "validation.isNotEqualToField", field_key)
    return VALID


def validate_region_code(
    value: Any,
    values: Mapping[str, Any] | None,
    countries: Iterable[Mapping[str, Any]],
    country_id: str = "US",
) -> ValidationResult:
    """Check that *value* is a region code of *country_id*.

    *countries* is the storefront's country list: mappings with an ``id`` and
    an optional ``available_regions`` list of ``{"code": ...}`` mappings.
    """
    country = next((c for c in countries or () if c.get("id") == country_id), None)
    if country is None:
        return Invalid(
            f'Country "{country_id}" is not an available country.',
            "validation.invalidCountry",
            country_id,
        )

    regions = country.get("available_regions")
    if not regions:
        return Invalid(
            f'Country "{country_id}" does not contain any available regions.',
            "validation.invalidRegions",
            country_id,
        )

    if not any(region.get("code") == value for region in regions):
        return Invalid(
            f'State "{value}" is not a valid state abbreviation.',
            "validation.invalidAbbreviation",
            value,
        )
    return VALID


def _character_class(char: str) -> str | None:
    if char.isspace():
        return None
    # Only ASCII letters and digits; anything else counts as special.
    if char in string.digits:
        return "digit"
    if char in string.ascii_lowercase:
        return "lower"
    if char in string.ascii_uppercase:
        return "upper"
    return "special"


def validate_password(
    value: Any,
    values: Mapping[str, Any] | None = None,
    min_classes: int = 3,
    min_length: int = 8,
) -> ValidationResult:
    """Require *min_classes* of lowercase, uppercase, digits and special characters."""
    password = value if isinstance(value, str) else ""
    classes = {_character_class(char) for char in password} - {None}
    if len(password) < min_length or len(classes) < min_classes:
        return Invalid(
            f"A password must contain at least {min_length} characters and "
            f"{min_classes} of the following: {', '.join(_PASSWORD_CLASSES)}.",
            "validation.validatePassword",
            min_classes,
        )
    return VALID


def is_valid_email(value: Any, values: Mapping[str, Any] | None = None) -> ValidationResult:
    failure = Invalid(
        "Please enter a valid email address (Ex: johndoe@domain.com).",
        "validation.validEmail",
    )
    if not isinstance(value, str) or len(value) > MAX_EMAIL_LENGTH:
        return failure
    match = EMAIL_PATTERN.fullmatch(value)
    if match is None or len(match.group("local")) > MAX_LOCAL_PART_LENGTH:
        return failure
    return VALID
