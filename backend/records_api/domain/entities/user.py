"""Domain entities — the user record and the typed inputs used to create or change it."""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class UserStatus(str, Enum):
    """Lifecycle status of a user record."""

    ACTIVE = "active"
    INACTIVE = "inactive"


# Marks a field that was not supplied in a partial update.
UNSET: Any = ...


@dataclass
class User:
    """Core domain entity representing a persisted user record."""

    name: str
    email: str
    age: int | None = None
    status: UserStatus = UserStatus.ACTIVE
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class NewUser:
    """A validated, normalized creation payload."""

    name: str
    email: str
    age: int | None = None
    status: UserStatus = UserStatus.ACTIVE


@dataclass(frozen=True)
class UserChanges:
    """A validated partial update.

    Fields left as ``UNSET`` were not supplied and must not be touched.
    ``age=None`` is a supplied value and clears the stored age.
    """

    name: str = UNSET
    email: str = UNSET
    age: int | None = UNSET
    status: UserStatus = UNSET

    def supplied(self) -> dict[str, Any]:
        """Return only the fields that were explicitly supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    @property
    def is_empty(self) -> bool:
        return not self.supplied()
