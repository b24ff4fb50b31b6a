"""Storefront form validators.

Quick usage::

    from buildpack.validators import is_required, is_valid_email, combine, rule

    check_email = combine(is_required, is_valid_email)
    check_email("someone@example.com", {})  # -> Valid()
"""

from buildpack.validators.forms import (
    Rule,
    combine,
    ensure_valid,
    rule,
    validate_field,
    validate_fields,
)
from buildpack.validators.results import VALID, Invalid, Valid, ValidationResult
from buildpack.validators.rules import (
    has_length_at_least,
    has_length_at_most,
    has_length_exactly,
    is_equal_to_field,
    is_not_equal_to_field,
    is_required,
    is_valid_email,
    must_be_checked,
    validate_password,
    validate_region_code,
)

__all__ = [
    "VALID",
    "Invalid",
    "Rule",
    "Valid",
    "ValidationResult",
    "combine",
    "ensure_valid",
    "has_length_at_least",
    "has_length_at_most",
    "has_length_exactly",
    "is_equal_to_field",
    "is_not_equal_to_field",
    "is_required",
    "is_valid_email",
    "must_be_checked",
    "rule",
    "validate_field",
    "validate_fields",
    "validate_password",
    "validate_region_code",
]
