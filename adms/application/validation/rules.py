"""Single-field rule primitives.

Each validate_* function inspects one value and returns a list of
ValidationViolation (empty when valid). None of them raise: a value of
the wrong type is reported as a violation like any other bad value.
"""

import re
from collections.abc import Collection
from datetime import datetime, timedelta
from uuid import UUID

from adms.application.validation.violations import ValidationViolation
from adms.domain.enums import ViolationKind
from adms.shared.utils.datetime import ensure_utc, is_unset

NIL_UUID = UUID(int=0)


def missing(field_name: str, message: str | None = None) -> ValidationViolation:
    """Build a MISSING_REQUIRED violation for field_name."""
    return ValidationViolation(
        message or f"{field_name} is required.",
        (field_name,),
        ViolationKind.MISSING_REQUIRED,
    )


def violation(
    message: str,
    *fields: str,
    kind: ViolationKind = ViolationKind.FORMAT,
) -> ValidationViolation:
    """Build a violation citing every member in fields."""
    return ValidationViolation(message, tuple(fields), kind)


def _as_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value.strip())
        except ValueError:
            return None
    return None


def is_guid(value: object, allow_empty: bool = False) -> bool:
    """Return whether value is a well-formed GUID (non-nil unless allow_empty)."""
    if value is None:
        return allow_empty
    parsed = _as_uuid(value)
    if parsed is None:
        return False
    return allow_empty or parsed != NIL_UUID


def validate_guid(
    value: object,
    field_name: str,
    allow_empty: bool = False,
) -> list[ValidationViolation]:
    """Check a GUID field.

    None and the nil UUID count as missing unless allow_empty is set; any
    other value must parse as a UUID.
    """
    empty = [] if allow_empty else [
        missing(field_name, f"{field_name} must be a valid non-empty GUID.")
    ]
    if value is None:
        return empty
    parsed = _as_uuid(value)
    if parsed is None:
        return [violation(f"{field_name} must be a valid GUID.", field_name)]
    if parsed == NIL_UUID:
        return empty
    return []


def validate_string(
    value: object,
    field_name: str,
    *,
    required: bool = True,
    min_length: int = 0,
    max_length: int | None = None,
    pattern: re.Pattern[str] | str | None = None,
    pattern_message: str | None = None,
    reserved_words: Collection[str] = (),
    allow_whitespace_only: bool = False,
) -> list[ValidationViolation]:
    """Check a bounded string field.

    Length is measured on the trimmed value. Reserved words are compared
    case-insensitively against the whole trimmed value. Pattern checks use
    re.fullmatch on the trimmed value.
    """
    if value is None or (isinstance(value, str) and not value):
        return [missing(field_name)] if required else []
    if not isinstance(value, str):
        return [violation(f"{field_name} must be a string.", field_name)]
    trimmed = value.strip()
    if not trimmed and not allow_whitespace_only:
        if required:
            return [missing(field_name, f"{field_name} cannot be empty or whitespace.")]
        return [violation(f"{field_name} cannot be whitespace only.", field_name)]

    results: list[ValidationViolation] = []
    if len(trimmed) < min_length:
        results.append(
            violation(f"{field_name} must be at least {min_length} characters.", field_name)
        )
    if max_length is not None and len(trimmed) > max_length:
        results.append(
            violation(f"{field_name} cannot exceed {max_length} characters.", field_name)
        )
    if pattern is not None and trimmed:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        if not compiled.fullmatch(trimmed):
            results.append(
                violation(pattern_message or f"{field_name} has an invalid format.", field_name)
            )
    if reserved_words and trimmed.lower() in {w.lower() for w in reserved_words}:
        results.append(
            violation(
                f"{field_name} '{trimmed}' is a reserved word and cannot be used.",
                field_name,
                kind=ViolationKind.BUSINESS_RULE,
            )
        )
    return results


def is_valid_timestamp(
    value: object,
    *,
    now: datetime,
    min_date: datetime,
    future_tolerance_minutes: float,
) -> bool:
    """Return whether value is a set datetime inside [min_date, now + tolerance]."""
    if not isinstance(value, datetime) or is_unset(value):
        return False
    moment = ensure_utc(value)
    return ensure_utc(min_date) <= moment <= ensure_utc(now) + timedelta(
        minutes=future_tolerance_minutes
    )


def validate_required_date(
    value: object,
    field_name: str,
    *,
    now: datetime,
    min_date: datetime,
    future_tolerance_minutes: float,
) -> list[ValidationViolation]:
    """Check a required timestamp.

    None or datetime.min is missing; values more than the tolerance ahead of
    now, or before the minimum system date, are format violations.
    """
    if value is None or (isinstance(value, datetime) and is_unset(value)):
        return [missing(field_name, f"{field_name} is required and cannot be the default value.")]
    if not isinstance(value, datetime):
        return [violation(f"{field_name} must be a datetime.", field_name)]
    moment = ensure_utc(value)
    if moment > ensure_utc(now) + timedelta(minutes=future_tolerance_minutes):
        return [violation(f"{field_name} cannot be in the future.", field_name)]
    floor = ensure_utc(min_date)
    if moment < floor:
        return [
            violation(
                f"{field_name} cannot be earlier than {floor:%Y-%m-%d}.",
                field_name,
            )
        ]
    return []


def validate_number_range(
    value: object,
    field_name: str,
    *,
    minimum: int | float | None = None,
    maximum: int | float | None = None,
    soft_maximum: int | float | None = None,
    soft_message: str | None = None,
) -> list[ValidationViolation]:
    """Check a numeric field against hard bounds and an optional soft tier.

    Below minimum or above maximum is a format violation; above
    soft_maximum (but within maximum) is an advisory.
    """
    if value is None:
        return [missing(field_name)]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return [violation(f"{field_name} must be a number.", field_name)]
    if minimum is not None and value < minimum:
        return [violation(f"{field_name} must be at least {minimum}.", field_name)]
    if maximum is not None and value > maximum:
        return [violation(f"{field_name} cannot exceed {maximum}.", field_name)]
    if soft_maximum is not None and value > soft_maximum:
        return [
            violation(
                soft_message or f"{field_name} exceeds the recommended maximum of {soft_maximum}.",
                field_name,
                kind=ViolationKind.ADVISORY,
            )
        ]
    return []


def validate_allowed_value(
    value: object,
    field_name: str,
    allowed: Collection[str],
) -> list[ValidationViolation]:
    """Check that a string value is one of allowed (case-insensitive)."""
    if value is None or value == "":
        return [missing(field_name)]
    if not isinstance(value, str):
        return [violation(f"{field_name} must be a string.", field_name)]
    if value.strip().upper() not in {a.upper() for a in allowed}:
        options = ", ".join(sorted(allowed))
        return [
            violation(
                f"{field_name} '{value}' is not allowed. Allowed values: {options}.",
                field_name,
            )
        ]
    return []
