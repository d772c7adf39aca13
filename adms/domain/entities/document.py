"""Document and revision entities.

Represent rows as the persistence layer hands them over: scalar columns
plus optionally-loaded navigation references and child collections.
Nothing here validates; conversion into DTOs does.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from adms.domain.entities.user import ActivityEntity, UserEntity

if TYPE_CHECKING:
    from adms.domain.entities.matter import (
        MatterDocumentActivityUserFromEntity,
        MatterDocumentActivityUserToEntity,
    )


@dataclass
class DocumentEntity:
    """Document row with its revision, activity and transfer collections."""

    id: UUID
    file_name: str
    extension: str
    file_size: int
    mime_type: str
    checksum: str
    creation_date: datetime
    is_checked_out: bool = False
    is_deleted: bool = False
    revisions: list[RevisionEntity] = field(default_factory=list)
    document_activity_users: list[DocumentActivityUserEntity] = field(default_factory=list)
    matter_document_activity_users_from: list[MatterDocumentActivityUserFromEntity] = field(
        default_factory=list
    )
    matter_document_activity_users_to: list[MatterDocumentActivityUserToEntity] = field(
        default_factory=list
    )


@dataclass
class RevisionEntity:
    """Revision row belonging to a document."""

    id: UUID
    document_id: UUID
    revision_number: int
    creation_date: datetime
    modification_date: datetime
    is_deleted: bool = False
    revision_activity_users: list[RevisionActivityUserEntity] = field(default_factory=list)


@dataclass
class DocumentActivityUserEntity:
    """Append-only audit row: a user performed an activity on a document."""

    document_id: UUID
    document_activity_id: UUID
    user_id: UUID
    created_at: datetime
    document_activity: ActivityEntity | None = None
    user: UserEntity | None = None


@dataclass
class RevisionActivityUserEntity:
    """Append-only audit row: a user performed an activity on a revision."""

    revision_id: UUID
    revision_activity_id: UUID
    user_id: UUID
    created_at: datetime
    revision_activity: ActivityEntity | None = None
    user: UserEntity | None = None
