"""DTO for documents, the central aggregate of the document store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from adms.application.dtos.activity import DocumentActivityUserDto, map_all
from adms.application.dtos.revision import RevisionDto
from adms.application.dtos.transfer import TransferRecordDto
from adms.application.validation.file_rules import (
    format_file_size,
    is_extension_allowed,
    is_file_name_valid,
    is_file_size_valid,
    is_mime_type_allowed,
    is_valid_checksum,
)
from adms.application.validation.rules import is_guid
from adms.core.config import get_settings
from adms.domain.enums import EntityStatus, TransferDirection
from adms.domain.value_objects import StatusFlags
from adms.shared.utils.datetime import is_unset


@dataclass(frozen=True)
class DocumentDto:
    """A stored file with its revisions, activity trail and transfer history.

    is_valid is a cheap shortcut over the field checks that matter most; the
    full rule set is run by the validation pipeline.
    """

    id: UUID
    file_name: str
    extension: str
    file_size: int
    mime_type: str
    checksum: str
    creation_date: datetime
    is_checked_out: bool = False
    is_deleted: bool = False
    revisions: tuple[RevisionDto | None, ...] = field(default_factory=tuple)
    activities: tuple[DocumentActivityUserDto | None, ...] = field(default_factory=tuple)
    transfers_from: tuple[TransferRecordDto | None, ...] = field(default_factory=tuple)
    transfers_to: tuple[TransferRecordDto | None, ...] = field(default_factory=tuple)

    @classmethod
    def map_entity(cls, entity: Any, include_children: bool = True) -> DocumentDto:
        """Map a document row; include_children=False maps the scalar fields only."""
        children: dict[str, Any] = {}
        if include_children:
            children = {
                "revisions": map_all(RevisionDto.map_entity, entity.revisions),
                "activities": map_all(
                    DocumentActivityUserDto.map_entity, entity.document_activity_users
                ),
                "transfers_from": map_all(
                    lambda t: TransferRecordDto.map_entity(t, TransferDirection.FROM),
                    entity.matter_document_activity_users_from,
                ),
                "transfers_to": map_all(
                    lambda t: TransferRecordDto.map_entity(t, TransferDirection.TO),
                    entity.matter_document_activity_users_to,
                ),
            }
        return cls(
            id=entity.id,
            file_name=entity.file_name,
            extension=entity.extension,
            file_size=entity.file_size,
            mime_type=entity.mime_type,
            checksum=entity.checksum,
            creation_date=entity.creation_date,
            is_checked_out=entity.is_checked_out,
            is_deleted=entity.is_deleted,
            **children,
        )

    @classmethod
    def map_summary(cls, entity: Any) -> DocumentDto:
        return cls.map_entity(entity, include_children=False)

    @staticmethod
    def describe_entity(entity: Any) -> str:
        name = f"{getattr(entity, 'file_name', '') or ''}{getattr(entity, 'extension', '') or ''}"
        return f"{name or '<unnamed>'} ({getattr(entity, 'id', None)})"

    def to_comparable_form(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "file_name": self.file_name,
            "extension": self.extension,
            "file_size": self.file_size,
            "mime_type": self.mime_type,
            "checksum": self.checksum,
            "creation_date": self.creation_date,
            "is_checked_out": self.is_checked_out,
            "is_deleted": self.is_deleted,
        }

    @property
    def full_file_name(self) -> str:
        return f"{self.file_name or ''}{self.extension or ''}"

    @property
    def formatted_file_size(self) -> str:
        return format_file_size(self.file_size or 0)

    @property
    def status_flags(self) -> StatusFlags:
        return StatusFlags(is_checked_out=self.is_checked_out, is_deleted=self.is_deleted)

    @property
    def status(self) -> EntityStatus:
        return self.status_flags.status

    @property
    def revision_count(self) -> int:
        return sum(1 for r in self.revisions if r is not None)

    @property
    def current_revision(self) -> RevisionDto | None:
        live = [r for r in self.revisions if r is not None and not r.is_deleted]
        return max(live, key=lambda r: r.revision_number, default=None)

    @property
    def total_activity_count(self) -> int:
        return len(self.activities) + len(self.transfers_from) + len(self.transfers_to)

    @property
    def is_valid(self) -> bool:
        """Quick check of identity, file metadata, checksum and status flags."""
        return (
            is_guid(self.id)
            and is_file_name_valid(self.file_name)
            and is_extension_allowed(self.extension)
            and is_file_size_valid(self.file_size, get_settings().max_file_size_bytes)
            and is_mime_type_allowed(self.mime_type)
            and is_valid_checksum(self.checksum)
            and not is_unset(self.creation_date)
            and self.status_flags.is_legal_resting_state()
        )

    def can_be_checked_out(self) -> bool:
        return not self.is_deleted and not self.is_checked_out

    def can_be_checked_in(self) -> bool:
        return self.is_checked_out and not self.is_deleted

    def can_be_deleted(self) -> bool:
        return not self.is_deleted and not self.is_checked_out

    def can_be_restored(self) -> bool:
        return self.is_deleted
