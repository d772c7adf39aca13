"""DTO for matters (legal cases grouping documents)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from adms.application.dtos.activity import MatterActivityUserDto, map_all
from adms.application.dtos.document import DocumentDto
from adms.application.validation.rules import is_guid, validate_string
from adms.core.constants import (
    MATTER_DESCRIPTION_MAX_LENGTH,
    MATTER_DESCRIPTION_MIN_LENGTH,
    RESERVED_MATTER_DESCRIPTIONS,
)
from adms.domain.enums import EntityStatus
from adms.domain.value_objects import StatusFlags
from adms.shared.utils.datetime import is_unset


@dataclass(frozen=True)
class MatterDto:
    """A matter with its documents and activity trail."""

    id: UUID
    description: str
    creation_date: datetime
    is_archived: bool = False
    is_deleted: bool = False
    documents: tuple[DocumentDto | None, ...] = field(default_factory=tuple)
    activities: tuple[MatterActivityUserDto | None, ...] = field(default_factory=tuple)

    @classmethod
    def map_entity(cls, entity: Any, include_children: bool = True) -> MatterDto:
        """Map a matter row; include_children=False maps the scalar fields only."""
        children: dict[str, Any] = {}
        if include_children:
            children = {
                "documents": map_all(DocumentDto.map_entity, entity.documents),
                "activities": map_all(
                    MatterActivityUserDto.map_entity, entity.matter_activity_users
                ),
            }
        return cls(
            id=entity.id,
            description=entity.description,
            creation_date=entity.creation_date,
            is_archived=entity.is_archived,
            is_deleted=entity.is_deleted,
            **children,
        )

    @classmethod
    def map_summary(cls, entity: Any) -> MatterDto:
        return cls.map_entity(entity, include_children=False)

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return f"{getattr(entity, 'description', None)} ({getattr(entity, 'id', None)})"

    def to_comparable_form(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "creation_date": self.creation_date,
            "is_archived": self.is_archived,
            "is_deleted": self.is_deleted,
        }

    @property
    def status_flags(self) -> StatusFlags:
        return StatusFlags(is_archived=self.is_archived, is_deleted=self.is_deleted)

    @property
    def status(self) -> EntityStatus:
        return self.status_flags.status

    @property
    def document_count(self) -> int:
        return sum(1 for d in self.documents if d is not None)

    @property
    def active_document_count(self) -> int:
        return sum(1 for d in self.documents if d is not None and not d.is_deleted)

    @property
    def is_valid(self) -> bool:
        return (
            is_guid(self.id)
            and not validate_string(
                self.description,
                "description",
                min_length=MATTER_DESCRIPTION_MIN_LENGTH,
                max_length=MATTER_DESCRIPTION_MAX_LENGTH,
                reserved_words=RESERVED_MATTER_DESCRIPTIONS,
            )
            and not is_unset(self.creation_date)
            and self.status_flags.is_legal_resting_state()
        )

    def can_be_archived(self) -> bool:
        return not self.is_archived and not self.is_deleted

    def can_be_unarchived(self) -> bool:
        return self.is_archived and not self.is_deleted

    def can_be_deleted(self) -> bool:
        return not self.is_deleted

    def can_be_restored(self) -> bool:
        return self.is_deleted
