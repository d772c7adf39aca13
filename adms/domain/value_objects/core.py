"""Domain value objects for ADMS validation.

Value objects are immutable types that represent domain concepts. They
have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from adms.domain.enums import EntityStatus
from adms.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class AuditKey:
    """Composite identity of an append-only audit record.

    Two audit records with equal keys are the same record. The timestamp is
    normalised to UTC so naive and aware datetimes of the same instant
    compare equal.
    """

    subject_id: UUID | None
    activity_type_id: UUID | None
    user_id: UUID | None
    timestamp: datetime | None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", ensure_utc(self.timestamp))

    def matches(self, other: "AuditKey", tolerance_seconds: float = 0.0) -> bool:
        """Return whether other names the same subject, activity and user
        with a timestamp within tolerance_seconds.

        Args:
            other: Key to compare with.
            tolerance_seconds: Maximum allowed clock difference.

        Returns:
            True if the keys identify the same logical event.
        """
        if (self.subject_id, self.activity_type_id, self.user_id) != (
            other.subject_id,
            other.activity_type_id,
            other.user_id,
        ):
            return False
        if self.timestamp is None or other.timestamp is None:
            return self.timestamp is other.timestamp
        return abs((self.timestamp - other.timestamp).total_seconds()) <= tolerance_seconds


@dataclass(frozen=True)
class StatusFlags:
    """Stored status flags of a document or matter.

    Deleted may not co-occur with CheckedOut or Archived. Construction never
    raises: the conflict is reported by the validation pipeline, and the
    derived status gives Deleted precedence.
    """

    is_checked_out: bool = False
    is_deleted: bool = False
    is_archived: bool = False

    @property
    def status(self) -> EntityStatus:
        """Derived resting state (Deleted > CheckedOut > Archived > Active)."""
        if self.is_deleted:
            return EntityStatus.DELETED
        if self.is_checked_out:
            return EntityStatus.CHECKED_OUT
        if self.is_archived:
            return EntityStatus.ARCHIVED
        return EntityStatus.ACTIVE

    def conflicting_flags(self) -> tuple[str, ...]:
        """Return the names of flags that may not be set together, or ()."""
        if not self.is_deleted:
            return ()
        others = tuple(
            name
            for name, value in (
                ("is_checked_out", self.is_checked_out),
                ("is_archived", self.is_archived),
            )
            if value
        )
        return (*others, "is_deleted") if others else ()

    def is_legal_resting_state(self) -> bool:
        """Return whether the flag combination is a legal resting state."""
        return not self.conflicting_flags()
