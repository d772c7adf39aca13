"""Domain exceptions for ADMS validation.

Validation findings are data (ValidationViolation), not exceptions. The
exceptions here cover programming errors and the conversion gateway's
strict-mode failures. A presentation layer maps them to HTTP responses
using message, error_code, and details.
"""

from collections.abc import Sequence
from typing import Any


class AdmsException(Exception):
    """Base exception for all ADMS validation errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, entity key).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AdmsException):
    """Raised on misuse of the validation API (e.g. unregistered aggregate type)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the failure.
            field: Optional field or argument that caused it.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class EntityConversionException(AdmsException):
    """Raised when an entity cannot be converted into a valid DTO.

    Carries the entity's natural key and every blocking violation message so
    the failure is traceable without the original ValidationOutcome.
    """

    def __init__(
        self,
        entity_type: str,
        entity_key: str,
        messages: Sequence[str],
        *,
        fields: Sequence[str] = (),
        item_index: int | None = None,
        item_count: int | None = None,
        reason: str | None = None,
        violations: Sequence[Any] = (),
    ) -> None:
        """Initialize with conversion context.

        Args:
            entity_type: DTO type name being produced (e.g. 'DocumentDto').
            entity_key: Natural key of the source entity.
            messages: Violation messages (or a single mapping error message).
            fields: Field paths cited by the violations.
            item_index: Zero-based position in a bulk conversion, if any.
            item_count: Size of the bulk conversion, if any.
            reason: Short classification (e.g. 'validation', 'mapping').
            violations: The ValidationViolation objects behind messages, if any.
        """
        joined = "; ".join(messages) if messages else "unknown error"
        message = f"{entity_type} conversion failed for '{entity_key}': {joined}"
        if item_index is not None and item_count is not None:
            message = f"item {item_index + 1} of {item_count}: {message}"
        super().__init__(
            message,
            "ENTITY_CONVERSION_ERROR",
            {
                "entity_type": entity_type,
                "entity_key": entity_key,
                "errors": list(messages),
                "fields": list(fields),
                "item_index": item_index,
                "item_count": item_count,
                "reason": reason or "validation",
            },
        )
        self.entity_type = entity_type
        self.entity_key = entity_key
        self.messages = tuple(messages)
        self.violations = tuple(violations)

    def at_position(self, item_index: int, item_count: int) -> "EntityConversionException":
        """Return a copy of this error with bulk positional context attached."""
        return EntityConversionException(
            self.entity_type,
            self.entity_key,
            self.messages,
            fields=self.details.get("fields", ()),
            item_index=item_index,
            item_count=item_count,
            reason=self.details.get("reason"),
            violations=self.violations,
        )
