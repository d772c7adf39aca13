"""Application DTOs: immutable aggregates validated by the pipeline."""

from adms.application.dtos.activity import (
    DocumentActivityUserDto,
    MatterActivityUserDto,
    RevisionActivityUserDto,
)
from adms.application.dtos.document import DocumentDto
from adms.application.dtos.matter import MatterDto
from adms.application.dtos.revision import RevisionDto
from adms.application.dtos.transfer import TransferRecordDto
from adms.application.dtos.user import ActivityDto, UserDto

__all__ = [
    "ActivityDto",
    "DocumentActivityUserDto",
    "DocumentDto",
    "MatterActivityUserDto",
    "MatterDto",
    "RevisionActivityUserDto",
    "RevisionDto",
    "TransferRecordDto",
    "UserDto",
]
