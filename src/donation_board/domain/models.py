"""Domain models for users and profiles."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Account roles offered at registration."""

    DONOR = "DONOR"
    BENEFICIARY = "BENEFICIARY"


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user held in the client state store."""

    id: UUID
    email: str
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def avatar_url(self) -> str | None:
        """Return the avatar URL from user metadata, if any."""
        value = self.metadata.get("avatar_url")
        return str(value) if value else None


@dataclass(frozen=True)
class Profile:
    """Public profile row for a user."""

    id: UUID
    full_name: str
    avatar_url: str | None = None
    role: Role | None = None
    username: str | None = None
    city: str | None = None
    biography: str | None = None
    visibility: bool = True
    last_seen: datetime | None = None


@dataclass(frozen=True)
class Review:
    """A review left for a user."""

    id: UUID
    rating: float
    comment: str
    created_at: datetime | None
    reviewer_name: str | None = None
    reviewer_avatar_url: str | None = None
