"""Direct messaging service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from donation_board.domain.errors import ValidationError
from donation_board.domain.messages import Chat, Message, chat_id
from donation_board.domain.models import Profile


class MessageRepository(Protocol):
    """Persistence interface for messages."""

    def list_for_user(self, user_id: UUID, ascending: bool) -> list[Message]:
        """Return messages sent or received by the user, ordered by creation."""

    def list_between(self, user_id: UUID, other_id: UUID) -> list[Message]:
        """Return the conversation between two users, oldest first."""

    def mark_read(self, message_ids: list[UUID]) -> None:
        """Mark messages as read."""

    def create_message(self, payload: dict[str, object]) -> Message:
        """Insert a message row and return it."""


class ProfileLookup(Protocol):
    """Read access to profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return a profile by user id, if present."""


@dataclass
class MessageService:
    """Group, read and send messages."""

    repository: MessageRepository
    profiles: ProfileLookup

    def list_chats(self, user_id: UUID) -> list[Chat]:
        """Return one chat per counterpart, most recent first."""
        messages = self.repository.list_for_user(user_id, ascending=False)
        latest: dict[UUID, Message] = {}
        unread: dict[UUID, int] = {}
        for message in messages:
            other_id = message.counterpart(user_id)
            latest.setdefault(other_id, message)
            if not message.read and message.receiver_id == user_id:
                unread[other_id] = unread.get(other_id, 0) + 1

        chats = []
        for other_id, message in latest.items():
            profile = self.profiles.get_profile(other_id)
            chats.append(
                Chat(
                    id=chat_id(user_id, other_id),
                    counterpart_id=other_id,
                    last_message=message,
                    unread_count=unread.get(other_id, 0),
                    counterpart_name=profile.full_name if profile else None,
                    counterpart_avatar_url=profile.avatar_url if profile else None,
                    announcement_id=message.announcement_id,
                )
            )
        return chats

    def open_conversation(self, user_id: UUID, other_id: UUID) -> list[Message]:
        """Return the conversation and mark received messages as read."""
        messages = self.repository.list_between(user_id, other_id)
        unread_ids = [
            message.id
            for message in messages
            if not message.read and message.receiver_id == user_id
        ]
        if unread_ids:
            self.repository.mark_read(unread_ids)
        return messages

    def send_message(
        self,
        sender_id: UUID,
        receiver_id: UUID,
        content: str,
        announcement_id: UUID | None = None,
    ) -> Message:
        """Send a message to another user."""
        cleaned = content.strip()
        if not cleaned:
            raise ValidationError("Message cannot be empty")
        if sender_id == receiver_id:
            raise ValidationError("Cannot message yourself")
        return self.repository.create_message(
            {
                "sender_id": str(sender_id),
                "receiver_id": str(receiver_id),
                "content": cleaned,
                "created_at": datetime.now(tz=UTC).isoformat(),
                "read": False,
                "announcement_id": str(announcement_id) if announcement_id else None,
            }
        )
