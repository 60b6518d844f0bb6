"""Chat list and conversation view."""

from dataclasses import dataclass
from uuid import UUID

from donation_board.domain.messages import Chat, Message
from donation_board.domain.results import Failure, Ok
from donation_board.services.messages import MessageService
from donation_board.services.store import ClientStateStore
from donation_board.views.base import require_user, run_action


@dataclass
class MessagesView:
    store: ClientStateStore
    message_service: MessageService

    def chats(self) -> Ok[list[Chat]] | Failure:
        """List the session user's chats."""

        def load() -> list[Chat]:
            user = require_user(self.store, "read messages")
            return self.message_service.list_chats(user.id)

        return run_action(self.store, "load_chats", load)

    def conversation(self, other_id: UUID) -> Ok[list[Message]] | Failure:
        """Open the conversation with another user."""

        def load() -> list[Message]:
            user = require_user(self.store, "read messages")
            return self.message_service.open_conversation(user.id, other_id)

        return run_action(self.store, "load_conversation", load)

    def send(
        self, other_id: UUID, content: str, announcement_id: UUID | None = None
    ) -> Ok[Message] | Failure:
        """Send a message to another user."""

        def send() -> Message:
            user = require_user(self.store, "send messages")
            return self.message_service.send_message(
                user.id, other_id, content, announcement_id
            )

        return run_action(self.store, "send_message", send)
