"""Domain value objects and shared value types."""

from adms.domain.value_objects.core import AuditKey, StatusFlags

__all__ = [
    "AuditKey",
    "StatusFlags",
]
