"""DTOs for append-only activity audit records.

Each record is identified by its composite AuditKey (subject, activity
type, user, timestamp); equality and hashing use that key only, so two
copies of the same row with different navigation objects attached are
still the same record.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeVar
from uuid import UUID

from adms.application.dtos.user import ActivityDto, UserDto
from adms.domain.value_objects import AuditKey

if TYPE_CHECKING:
    from adms.application.dtos.matter import MatterDto

M = TypeVar("M")


def map_optional(mapper: Callable[[Any], M], value: Any) -> M | None:
    """Map value with mapper, keeping None as None."""
    return None if value is None else mapper(value)


def map_all(mapper: Callable[[Any], M], values: Iterable[Any] | None) -> tuple[M | None, ...]:
    """Map every item of an optional collection into a tuple (None items stay None)."""
    return tuple(map_optional(mapper, value) for value in values or ())


class AuditRecordMixin:
    """Equality, hashing and display shared by audit record DTOs."""

    subject_field: str
    activity_field: str
    activity_reference: str

    @property
    def audit_key(self) -> AuditKey:
        return AuditKey(
            getattr(self, self.subject_field),
            getattr(self, self.activity_field),
            self.user_id,
            self.created_at,
        )

    @property
    def activity_name(self) -> str | None:
        reference = getattr(self, self.activity_reference)
        return getattr(reference, "normalized_activity", None)

    @property
    def formatted_timestamp(self) -> str:
        return self.created_at.strftime("%Y-%m-%d %H:%M:%S") if self.created_at else ""

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.audit_key == other.audit_key

    def __hash__(self) -> int:
        return hash(self.audit_key)

    def to_comparable_form(self) -> dict[str, Any]:
        return {
            self.subject_field: getattr(self, self.subject_field),
            self.activity_field: getattr(self, self.activity_field),
            "user_id": self.user_id,
            "created_at": self.created_at,
        }


@dataclass(frozen=True, eq=False)
class DocumentActivityUserDto(AuditRecordMixin):
    """A user performed a document activity (CREATED, CHECKED OUT, ...)."""

    subject_field = "document_id"
    activity_field = "document_activity_id"
    activity_reference = "document_activity"

    document_id: UUID
    document_activity_id: UUID
    user_id: UUID
    created_at: datetime
    document_activity: ActivityDto | None = None
    user: UserDto | None = None

    @classmethod
    def map_entity(cls, entity: Any) -> DocumentActivityUserDto:
        return cls(
            document_id=entity.document_id,
            document_activity_id=entity.document_activity_id,
            user_id=entity.user_id,
            created_at=entity.created_at,
            document_activity=map_optional(ActivityDto.map_entity, entity.document_activity),
            user=map_optional(UserDto.map_entity, entity.user),
        )

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return (
            f"document {getattr(entity, 'document_id', None)} / activity "
            f"{getattr(entity, 'document_activity_id', None)} / user "
            f"{getattr(entity, 'user_id', None)} @ {getattr(entity, 'created_at', None)}"
        )


@dataclass(frozen=True, eq=False)
class RevisionActivityUserDto(AuditRecordMixin):
    """A user performed a revision activity (CREATED, SAVED, ...)."""

    subject_field = "revision_id"
    activity_field = "revision_activity_id"
    activity_reference = "revision_activity"

    revision_id: UUID
    revision_activity_id: UUID
    user_id: UUID
    created_at: datetime
    revision_activity: ActivityDto | None = None
    user: UserDto | None = None

    @classmethod
    def map_entity(cls, entity: Any) -> RevisionActivityUserDto:
        return cls(
            revision_id=entity.revision_id,
            revision_activity_id=entity.revision_activity_id,
            user_id=entity.user_id,
            created_at=entity.created_at,
            revision_activity=map_optional(ActivityDto.map_entity, entity.revision_activity),
            user=map_optional(UserDto.map_entity, entity.user),
        )

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return (
            f"revision {getattr(entity, 'revision_id', None)} / activity "
            f"{getattr(entity, 'revision_activity_id', None)} / user "
            f"{getattr(entity, 'user_id', None)} @ {getattr(entity, 'created_at', None)}"
        )


@dataclass(frozen=True, eq=False)
class MatterActivityUserDto(AuditRecordMixin):
    """A user performed a matter activity (CREATED, ARCHIVED, ...)."""

    subject_field = "matter_id"
    activity_field = "matter_activity_id"
    activity_reference = "matter_activity"

    matter_id: UUID
    matter_activity_id: UUID
    user_id: UUID
    created_at: datetime
    matter_activity: ActivityDto | None = None
    matter: MatterDto | None = None
    user: UserDto | None = None

    @classmethod
    def map_entity(cls, entity: Any) -> MatterActivityUserDto:
        from adms.application.dtos.matter import MatterDto

        return cls(
            matter_id=entity.matter_id,
            matter_activity_id=entity.matter_activity_id,
            user_id=entity.user_id,
            created_at=entity.created_at,
            matter_activity=map_optional(ActivityDto.map_entity, entity.matter_activity),
            matter=map_optional(MatterDto.map_summary, getattr(entity, "matter", None)),
            user=map_optional(UserDto.map_entity, entity.user),
        )

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return (
            f"matter {getattr(entity, 'matter_id', None)} / activity "
            f"{getattr(entity, 'matter_activity_id', None)} / user "
            f"{getattr(entity, 'user_id', None)} @ {getattr(entity, 'created_at', None)}"
        )
