"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on the application layer. Entities mirror the shape the
persistence layer hands over; value objects and enums are shared by the
validation framework.
"""

from adms.domain.enums import (
    ConversionMode,
    EntityStatus,
    TransferDirection,
    ViolationKind,
)
from adms.domain.exceptions import (
    AdmsException,
    EntityConversionException,
    ValidationException,
)
from adms.domain.value_objects import AuditKey, StatusFlags

__all__ = [
    # Enums
    "ConversionMode",
    "EntityStatus",
    "TransferDirection",
    "ViolationKind",
    # Exceptions
    "AdmsException",
    "EntityConversionException",
    "ValidationException",
    # Value objects
    "AuditKey",
    "StatusFlags",
]
