"""Persistence-shaped entities.

Plain rows and object graphs as the persistence layer provides them; the
conversion gateway maps them into validated DTOs.
"""

from adms.domain.entities.document import (
    DocumentActivityUserEntity,
    DocumentEntity,
    RevisionActivityUserEntity,
    RevisionEntity,
)
from adms.domain.entities.matter import (
    MatterActivityUserEntity,
    MatterDocumentActivityUserFromEntity,
    MatterDocumentActivityUserToEntity,
    MatterEntity,
)
from adms.domain.entities.user import ActivityEntity, UserEntity

__all__ = [
    "ActivityEntity",
    "DocumentActivityUserEntity",
    "DocumentEntity",
    "MatterActivityUserEntity",
    "MatterDocumentActivityUserFromEntity",
    "MatterDocumentActivityUserToEntity",
    "MatterEntity",
    "RevisionActivityUserEntity",
    "RevisionEntity",
    "UserEntity",
]
