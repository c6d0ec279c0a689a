"""Add-form validation rules.

Each field is checked independently and every violation is collected.
Per field, the ``required`` rule takes precedence over ``contains_number``:
a blank name reports only that it is required.

Pure functions: the caller owns where the resulting error set is stored.
"""

from __future__ import annotations

import re
from enum import StrEnum

from userlist.domain.records import UserCandidate

FieldErrorSet = dict[str, str]
"""Field name (``firstName``, ``companyName``, ...) -> human-readable message."""

_DIGIT = re.compile(r"[0-9]")


class RuleCode(StrEnum):
    """Machine-readable rule identifiers."""

    REQUIRED = "required"
    CONTAINS_NUMBER = "contains_number"


ERROR_MESSAGES: dict[str, dict[RuleCode, str]] = {
    "firstName": {
        RuleCode.REQUIRED: "First name is required",
        RuleCode.CONTAINS_NUMBER: "First name should not contain numbers",
    },
    "lastName": {
        RuleCode.REQUIRED: "Last name is required",
        RuleCode.CONTAINS_NUMBER: "Last name should not contain numbers",
    },
    "companyName": {RuleCode.REQUIRED: "Company name is required"},
    "role": {RuleCode.REQUIRED: "Role is required"},
    "country": {RuleCode.REQUIRED: "Country is required"},
}

# Fields that must also be free of digits.
_NAME_FIELDS = frozenset({"firstName", "lastName"})


def has_number(value: str) -> bool:
    """True if *value* contains an ASCII digit. Other Unicode digits do not count."""
    return _DIGIT.search(value) is not None


def check_field(field: str, value: str) -> RuleCode | None:
    """Return the first rule *value* breaks for *field*, or None."""
    if field not in ERROR_MESSAGES:
        msg = f"Unknown form field: {field!r}"
        raise ValueError(msg)
    if not value.strip():
        return RuleCode.REQUIRED
    if field in _NAME_FIELDS and has_number(value):
        return RuleCode.CONTAINS_NUMBER
    return None


def field_codes(candidate: UserCandidate) -> dict[str, RuleCode]:
    """Rule codes for every failing field of *candidate*."""
    wire = candidate.model_dump(by_alias=True)
    codes: dict[str, RuleCode] = {}
    for field in ERROR_MESSAGES:
        code = check_field(field, wire[field])
        if code is not None:
            codes[field] = code
    return codes


def validate(candidate: UserCandidate) -> tuple[bool, FieldErrorSet]:
    """Validate *candidate*, returning ``(ok, errors)``.

    ``ok`` is True iff ``errors`` is empty.
    """
    errors = {field: ERROR_MESSAGES[field][code] for field, code in field_codes(candidate).items()}
    return not errors, errors
