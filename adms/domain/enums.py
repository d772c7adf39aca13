"""Domain enumerations for ADMS validation.

Enums represent fixed sets of domain values (violation kinds, resting
states, transfer direction, conversion mode).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ViolationKind(_ValuesMixin, str, Enum):
    """Taxonomy of validation findings.

    Every kind except ADVISORY invalidates the aggregate. ADVISORY is a
    compliance or quality signal that callers surface but need not block on.
    """

    MISSING_REQUIRED = "missing_required"
    FORMAT = "format_violation"
    BUSINESS_RULE = "business_rule_violation"
    CROSS_PROPERTY = "cross_property_violation"
    REFERENTIAL_INTEGRITY = "referential_integrity_violation"
    STATE_ILLEGAL = "state_illegal"
    ADVISORY = "advisory"

    @property
    def is_blocking(self) -> bool:
        """Return whether findings of this kind invalidate the aggregate."""
        return self is not ViolationKind.ADVISORY


class EntityStatus(_ValuesMixin, str, Enum):
    """Derived resting state of a status-bearing aggregate (never stored)."""

    ACTIVE = "active"
    CHECKED_OUT = "checked_out"
    DELETED = "deleted"
    ARCHIVED = "archived"


class TransferDirection(_ValuesMixin, str, Enum):
    """Side of a matter-to-matter document transfer a record was written from.

    FROM records are keyed to the source matter, TO records to the
    destination matter.
    """

    FROM = "from"
    TO = "to"

    @property
    def opposite(self) -> "TransferDirection":
        """Return the other side of the transfer."""
        return TransferDirection.TO if self is TransferDirection.FROM else TransferDirection.FROM


class ConversionMode(_ValuesMixin, str, Enum):
    """Bulk conversion behaviour on invalid items.

    STRICT raises on the first invalid item; TOLERANT skips and reports.
    """

    STRICT = "strict"
    TOLERANT = "tolerant"
