"""Matter entities: the matter row, its audit rows, and transfer rows.

A document moved or copied between matters is recorded twice: once in the
"from" table keyed to the source matter and once in the "to" table keyed to
the destination matter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID

from adms.domain.entities.user import ActivityEntity, UserEntity
from adms.domain.enums import TransferDirection

if TYPE_CHECKING:
    from adms.domain.entities.document import DocumentEntity


@dataclass
class MatterEntity:
    """Matter row with its documents and activity audit rows."""

    id: UUID
    description: str
    creation_date: datetime
    is_archived: bool = False
    is_deleted: bool = False
    documents: list[DocumentEntity] = field(default_factory=list)
    matter_activity_users: list[MatterActivityUserEntity] = field(default_factory=list)


@dataclass
class MatterActivityUserEntity:
    """Append-only audit row: a user performed an activity on a matter."""

    matter_id: UUID
    matter_activity_id: UUID
    user_id: UUID
    created_at: datetime
    matter_activity: ActivityEntity | None = None
    matter: MatterEntity | None = None
    user: UserEntity | None = None


@dataclass
class _MatterDocumentActivityUserEntity:
    """Shared shape of the from/to transfer tables."""

    direction: ClassVar[TransferDirection]

    matter_id: UUID
    document_id: UUID
    matter_document_activity_id: UUID
    user_id: UUID
    created_at: datetime
    counterpart_matter_id: UUID | None = None
    matter_document_activity: ActivityEntity | None = None
    matter: MatterEntity | None = None
    counterpart_matter: MatterEntity | None = None
    document: DocumentEntity | None = None
    user: UserEntity | None = None


@dataclass
class MatterDocumentActivityUserFromEntity(_MatterDocumentActivityUserEntity):
    """Transfer row keyed to the source matter."""

    direction: ClassVar[TransferDirection] = TransferDirection.FROM


@dataclass
class MatterDocumentActivityUserToEntity(_MatterDocumentActivityUserEntity):
    """Transfer row keyed to the destination matter."""

    direction: ClassVar[TransferDirection] = TransferDirection.TO
