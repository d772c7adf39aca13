"""DTO for document revisions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from adms.application.dtos.activity import RevisionActivityUserDto, map_all


@dataclass(frozen=True)
class RevisionDto:
    """One numbered revision of a document, with its activity trail."""

    id: UUID
    document_id: UUID
    revision_number: int
    creation_date: datetime
    modification_date: datetime
    is_deleted: bool = False
    activities: tuple[RevisionActivityUserDto | None, ...] = field(default_factory=tuple)

    @classmethod
    def map_entity(cls, entity: Any, include_children: bool = True) -> "RevisionDto":
        activities = (
            map_all(RevisionActivityUserDto.map_entity, entity.revision_activity_users)
            if include_children
            else ()
        )
        return cls(
            id=entity.id,
            document_id=entity.document_id,
            revision_number=entity.revision_number,
            creation_date=entity.creation_date,
            modification_date=entity.modification_date,
            is_deleted=entity.is_deleted,
            activities=activities,
        )

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return (
            f"revision {getattr(entity, 'revision_number', None)} of document "
            f"{getattr(entity, 'document_id', None)} ({getattr(entity, 'id', None)})"
        )

    def to_comparable_form(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "document_id": self.document_id,
            "revision_number": self.revision_number,
            "creation_date": self.creation_date,
            "modification_date": self.modification_date,
            "is_deleted": self.is_deleted,
        }

    @property
    def display_text(self) -> str:
        return f"Revision {self.revision_number}"
