"""DTO for matter-to-matter document transfer records.

A MOVED or COPIED transfer is written twice: a FROM record keyed to the
source matter and a TO record keyed to the destination matter. Both halves
share the audit key, so equality also compares direction and matter_id.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from adms.application.dtos.activity import AuditRecordMixin, map_optional
from adms.application.dtos.user import ActivityDto, UserDto
from adms.domain.enums import TransferDirection

if TYPE_CHECKING:
    from adms.application.dtos.document import DocumentDto
    from adms.application.dtos.matter import MatterDto


@dataclass(frozen=True, eq=False)
class TransferRecordDto(AuditRecordMixin):
    """One side of a document transfer between two matters."""

    subject_field = "document_id"
    activity_field = "matter_document_activity_id"
    activity_reference = "matter_document_activity"

    direction: TransferDirection
    matter_id: UUID
    document_id: UUID
    matter_document_activity_id: UUID
    user_id: UUID
    created_at: datetime
    counterpart_matter_id: UUID | None = None
    matter_document_activity: ActivityDto | None = None
    matter: MatterDto | None = None
    counterpart_matter: MatterDto | None = None
    document: DocumentDto | None = None
    user: UserDto | None = None

    @classmethod
    def map_entity(
        cls,
        entity: Any,
        direction: TransferDirection | None = None,
    ) -> TransferRecordDto:
        """Map a transfer row; direction defaults to the entity's own."""
        from adms.application.dtos.document import DocumentDto
        from adms.application.dtos.matter import MatterDto

        return cls(
            direction=TransferDirection(direction or entity.direction),
            matter_id=entity.matter_id,
            document_id=entity.document_id,
            matter_document_activity_id=entity.matter_document_activity_id,
            user_id=entity.user_id,
            created_at=entity.created_at,
            counterpart_matter_id=getattr(entity, "counterpart_matter_id", None),
            matter_document_activity=map_optional(
                ActivityDto.map_entity, entity.matter_document_activity
            ),
            matter=map_optional(MatterDto.map_summary, entity.matter),
            counterpart_matter=map_optional(
                MatterDto.map_summary, getattr(entity, "counterpart_matter", None)
            ),
            document=map_optional(DocumentDto.map_summary, entity.document),
            user=map_optional(UserDto.map_entity, entity.user),
        )

    @staticmethod
    def describe_entity(entity: Any) -> str:
        direction = getattr(entity, "direction", None)
        side = getattr(direction, "value", direction)
        return (
            f"{side} matter {getattr(entity, 'matter_id', None)} / document "
            f"{getattr(entity, 'document_id', None)} / user "
            f"{getattr(entity, 'user_id', None)} @ {getattr(entity, 'created_at', None)}"
        )

    @property
    def source_matter_id(self) -> UUID | None:
        if self.direction is TransferDirection.FROM:
            return self.matter_id
        return self.counterpart_matter_id

    @property
    def destination_matter_id(self) -> UUID | None:
        if self.direction is TransferDirection.TO:
            return self.matter_id
        return self.counterpart_matter_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransferRecordDto):
            return NotImplemented
        return (self.direction, self.matter_id, self.audit_key) == (
            other.direction,
            other.matter_id,
            other.audit_key,
        )

    def __hash__(self) -> int:
        return hash((self.direction, self.matter_id, self.audit_key))

    def to_comparable_form(self) -> dict[str, Any]:
        return {
            "direction": self.direction,
            "matter_id": self.matter_id,
            **super().to_comparable_form(),
            "counterpart_matter_id": self.counterpart_matter_id,
        }
