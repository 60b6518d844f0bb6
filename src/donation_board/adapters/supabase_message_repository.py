"""Supabase repository for direct messages."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from donation_board.adapters.supabase_errors import remote_call
from donation_board.domain.errors import RemoteCallError
from donation_board.domain.messages import Message
from donation_board.services.messages import MessageRepository

_COLUMNS = "id, sender_id, receiver_id, content, created_at, read, announcement_id"


@dataclass
class SupabaseMessageRepository(MessageRepository):
    """Supabase implementation for the messages table."""

    client: Client

    def list_for_user(self, user_id: UUID, ascending: bool) -> list[Message]:
        """Return messages sent or received by the user."""
        with remote_call("load chats"):
            response = (
                self.client.table("messages")
                .select(_COLUMNS)
                .or_(f"sender_id.eq.{user_id},receiver_id.eq.{user_id}")
                .order("created_at", desc=not ascending)
                .execute()
            )
        return [_parse_message(row) for row in response.data or []]

    def list_between(self, user_id: UUID, other_id: UUID) -> list[Message]:
        """Return the conversation between two users, oldest first."""
        pair_filter = (
            f"and(sender_id.eq.{user_id},receiver_id.eq.{other_id}),"
            f"and(sender_id.eq.{other_id},receiver_id.eq.{user_id})"
        )
        with remote_call("load messages"):
            response = (
                self.client.table("messages")
                .select(_COLUMNS)
                .or_(pair_filter)
                .order("created_at", desc=False)
                .execute()
            )
        return [_parse_message(row) for row in response.data or []]

    def mark_read(self, message_ids: list[UUID]) -> None:
        """Mark messages as read."""
        with remote_call("mark messages read"):
            self.client.table("messages").update({"read": True}).in_(
                "id", [str(message_id) for message_id in message_ids]
            ).execute()

    def create_message(self, payload: dict[str, object]) -> Message:
        """Insert a message row and return it."""
        with remote_call("send message"):
            response = self.client.table("messages").insert(payload).execute()
        if not response.data:
            raise RemoteCallError("send message", "no row returned")
        return _parse_message(response.data[0])


def _parse_message(row: dict[str, object]) -> Message:
    return Message(
        id=UUID(str(row["id"])),
        sender_id=UUID(str(row["sender_id"])),
        receiver_id=UUID(str(row["receiver_id"])),
        content=str(row.get("content") or ""),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        read=bool(row.get("read", False)),
        announcement_id=(
            UUID(str(row["announcement_id"])) if row.get("announcement_id") else None
        ),
    )
