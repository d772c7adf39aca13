"""File metadata rule primitives: names, extensions, MIME types, checksums, sizes.

Markup in user-supplied names is detected with nh3: a value that changes
when sanitised to plain text carries markup.
"""

import html
import re

import nh3

from adms.application.validation.rules import missing, validate_string, violation
from adms.application.validation.violations import ValidationViolation
from adms.core.config import MEGABYTE
from adms.core.constants import (
    ALLOWED_EXTENSIONS,
    ALLOWED_MIME_TYPES,
    CHECKSUM_DIGEST_LENGTHS,
    EXTENSION_MAX_LENGTH,
    EXTENSION_MIME_TYPES,
    EXTENSION_MIN_LENGTH,
    FILE_NAME_MAX_LENGTH,
    FILE_NAME_MIN_LENGTH,
    LEGAL_DOCUMENT_EXTENSIONS,
    MIME_TYPE_MAX_LENGTH,
    SCRIPT_PATTERNS,
    UNSAFE_NAME_PATTERNS,
)
from adms.domain.enums import ViolationKind

_INVALID_FILE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_EXTENSION_PATTERN = re.compile(r"\.[a-z0-9]+")
_MIME_TYPE_PATTERN = re.compile(r"[a-z0-9][a-z0-9!#$&^_.+-]*/[a-z0-9][a-z0-9!#$&^_.+-]*")
_HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")
_WHITESPACE = re.compile(r"\s+")
_WINDOWS_RESERVED_NAMES = frozenset(
    {"con", "prn", "aux", "nul"}
    | {f"com{i}" for i in range(1, 10)}
    | {f"lpt{i}" for i in range(1, 10)}
)


def contains_markup(value: str | None) -> bool:
    """Return whether free text carries HTML markup or a script pattern."""
    if not value:
        return False
    lowered = value.lower()
    if any(pattern in lowered for pattern in SCRIPT_PATTERNS):
        return True
    sanitised = html.unescape(nh3.clean(value, tags=set(), attributes={}))
    return sanitised != value


def contains_unsafe_content(value: str | None) -> bool:
    """Return whether a file name carries markup or a script/executable pattern."""
    if not value:
        return False
    lowered = value.lower()
    if any(pattern in lowered for pattern in UNSAFE_NAME_PATTERNS):
        return True
    return contains_markup(value)


def normalize_file_name(value: str | None) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.strip())


def validate_file_name(
    value: object,
    field_name: str = "file_name",
) -> list[ValidationViolation]:
    """Check a file name (without extension): length, filesystem-safe characters."""
    results = validate_string(
        value,
        field_name,
        min_length=FILE_NAME_MIN_LENGTH,
        max_length=FILE_NAME_MAX_LENGTH,
    )
    if results or not isinstance(value, str):
        return results
    if _INVALID_FILE_NAME_CHARS.search(value):
        results.append(violation(f"{field_name} contains invalid characters.", field_name))
    if value != value.rstrip(" ."):
        results.append(
            violation(f"{field_name} cannot end with a space or period.", field_name)
        )
    if value.strip().lower() in _WINDOWS_RESERVED_NAMES:
        results.append(
            violation(f"{field_name} '{value.strip()}' is a reserved system name.", field_name)
        )
    return results


def validate_extension(
    value: object,
    field_name: str = "extension",
) -> list[ValidationViolation]:
    """Check a file extension: leading dot, lowercase alphanumerics, allowed list."""
    results = validate_string(
        value,
        field_name,
        min_length=EXTENSION_MIN_LENGTH,
        max_length=EXTENSION_MAX_LENGTH,
        pattern=_EXTENSION_PATTERN,
        pattern_message=(
            f"{field_name} must start with a period followed by lowercase letters or digits."
        ),
    )
    if results or not isinstance(value, str):
        return results
    if not is_extension_allowed(value):
        results.append(
            violation(
                f"{field_name} '{value}' is not allowed. Allowed extensions: "
                f"{', '.join(ALLOWED_EXTENSIONS)}.",
                field_name,
            )
        )
    return results


def validate_mime_type(
    value: object,
    field_name: str = "mime_type",
) -> list[ValidationViolation]:
    """Check a MIME type: type/subtype form and the allowed list."""
    results = validate_string(
        value,
        field_name,
        max_length=MIME_TYPE_MAX_LENGTH,
        pattern=_MIME_TYPE_PATTERN,
        pattern_message=f"{field_name} must be a lowercase 'type/subtype' value.",
    )
    if results or not isinstance(value, str):
        return results
    if not is_mime_type_allowed(value):
        results.append(
            violation(f"{field_name} '{value}' is not an allowed MIME type.", field_name)
        )
    return results


def validate_mime_consistency(
    extension: str,
    mime_type: str,
    extension_field: str = "extension",
    mime_field: str = "mime_type",
) -> list[ValidationViolation]:
    """Check that mime_type is one the extension table expects for extension.

    Unknown extensions are left to validate_extension.
    """
    expected = expected_mime_types(extension)
    if not expected or mime_type.strip().lower() in expected:
        return []
    return [
        violation(
            f"{mime_field} '{mime_type}' does not match {extension_field} '{extension}' "
            f"(expected {' or '.join(expected)}).",
            extension_field,
            mime_field,
            kind=ViolationKind.CROSS_PROPERTY,
        )
    ]


def validate_checksum(
    value: object,
    field_name: str = "checksum",
) -> list[ValidationViolation]:
    """Check a hex digest: SHA-256 (64 chars) or SHA-512 (128 chars)."""
    if value is None or value == "":
        return [missing(field_name)]
    if not is_valid_checksum(value):
        lengths = " or ".join(str(n) for n in sorted(CHECKSUM_DIGEST_LENGTHS))
        return [
            violation(
                f"{field_name} must be a hexadecimal digest of {lengths} characters.",
                field_name,
            )
        ]
    return []


def validate_file_size(
    value: object,
    field_name: str = "file_size",
    *,
    max_bytes: int,
    warning_bytes: int,
) -> list[ValidationViolation]:
    """Check a size in bytes: positive, at most max_bytes, advisory above warning_bytes."""
    if value is None:
        return [missing(field_name)]
    if isinstance(value, bool) or not isinstance(value, int):
        return [violation(f"{field_name} must be a whole number of bytes.", field_name)]
    if value <= 0:
        return [violation(f"{field_name} must be greater than zero.", field_name)]
    if value > max_bytes:
        return [
            violation(
                f"{field_name} of {format_file_size(value)} exceeds the maximum of "
                f"{format_file_size(max_bytes)}.",
                field_name,
            )
        ]
    if value > warning_bytes:
        return [
            violation(
                f"Large file ({format_file_size(value)}); consider compression.",
                field_name,
                kind=ViolationKind.ADVISORY,
            )
        ]
    return []


def is_file_name_valid(value: object) -> bool:
    if validate_file_name(value):
        return False
    return not contains_unsafe_content(value)  # type: ignore[arg-type]


def is_extension_allowed(value: str | None) -> bool:
    return bool(value) and value.strip().lower() in EXTENSION_MIME_TYPES


def is_mime_type_allowed(value: str | None) -> bool:
    return bool(value) and value.strip().lower() in ALLOWED_MIME_TYPES


def is_file_size_valid(value: object, max_bytes: int = 100 * MEGABYTE) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 < value <= max_bytes
    )


def is_valid_checksum(value: object) -> bool:
    """Return whether value is a SHA-256 or SHA-512 hex digest."""
    return (
        isinstance(value, str)
        and len(value) in CHECKSUM_DIGEST_LENGTHS
        and _HEX_PATTERN.fullmatch(value) is not None
    )


def expected_mime_types(extension: str | None) -> tuple[str, ...]:
    """Return the MIME types the table maps extension to, or ()."""
    if not extension:
        return ()
    return EXTENSION_MIME_TYPES.get(extension.strip().lower(), ())


def is_legal_document_format(extension: str | None) -> bool:
    return bool(extension) and extension.strip().lower() in LEGAL_DOCUMENT_EXTENSIONS


def format_file_size(size: int) -> str:
    """Format a byte count for display (e.g. '512 bytes', '1.5 MB')."""
    if size < 1024:
        return f"{size} bytes"
    if size < 1024**2:
        return f"{size / 1024:.1f} KB"
    if size < 1024**3:
        return f"{size / 1024**2:.1f} MB"
    return f"{size / 1024**3:.1f} GB"
