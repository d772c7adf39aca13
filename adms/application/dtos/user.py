"""DTOs for users and activity-type lookup rows."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class UserDto:
    """User summary attached to audit records."""

    id: UUID
    name: str

    @classmethod
    def map_entity(cls, entity: Any) -> "UserDto":
        return cls(id=entity.id, name=entity.name)

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return f"{getattr(entity, 'name', None)} ({getattr(entity, 'id', None)})"

    def to_comparable_form(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @property
    def display_name(self) -> str:
        return self.name.strip() if isinstance(self.name, str) else ""


@dataclass(frozen=True)
class ActivityDto:
    """Activity-type lookup row (CREATED, CHECKED OUT, MOVED, ...)."""

    id: UUID
    activity: str

    @classmethod
    def map_entity(cls, entity: Any) -> "ActivityDto":
        return cls(id=entity.id, activity=entity.activity)

    @staticmethod
    def describe_entity(entity: Any) -> str:
        return f"{getattr(entity, 'activity', None)} ({getattr(entity, 'id', None)})"

    def to_comparable_form(self) -> dict[str, Any]:
        return {"id": self.id, "activity": self.activity}

    @property
    def normalized_activity(self) -> str | None:
        """Upper-case trimmed name, or None when no usable name is set."""
        if not isinstance(self.activity, str) or not self.activity.strip():
            return None
        return self.activity.strip().upper()
