"""User and activity-type entities (lookup rows shared by every audit table)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class UserEntity:
    """Persistence-shaped user row."""

    id: UUID
    name: str


@dataclass
class ActivityEntity:
    """Activity-type lookup row (e.g. CREATED, CHECKED OUT, MOVED)."""

    id: UUID
    activity: str
