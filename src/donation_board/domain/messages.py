"""Domain models for direct messages."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Message:
    """A message between two users."""

    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    created_at: datetime
    read: bool
    announcement_id: UUID | None = None

    def counterpart(self, user_id: UUID) -> UUID:
        """Return the other participant from the given user's point of view."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id


@dataclass(frozen=True)
class Chat:
    """Messages with one counterpart, summarized for the chat list."""

    id: str
    counterpart_id: UUID
    last_message: Message
    unread_count: int
    counterpart_name: str | None = None
    counterpart_avatar_url: str | None = None
    announcement_id: UUID | None = None


def chat_id(user_id: UUID, other_id: UUID) -> str:
    """Return a stable chat id for a pair of users."""
    return "-".join(sorted([str(user_id), str(other_id)]))
