"""Supabase Realtime subscription for listing changes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from supabase import AsyncClient, acreate_client

from donation_board.adapters.supabase_errors import remote_call
from donation_board.domain.events import ChannelStatus
from donation_board.services.reconciler import ChangeFeed

logger = logging.getLogger(__name__)


@dataclass
class SupabaseRealtimeFeed(ChangeFeed):
    """Postgres change feed for one table over a Supabase Realtime channel."""

    supabase_url: str
    supabase_key: str
    table: str = "announcements"
    channel_name: str = "announcements_changes"
    schema: str = "public"
    _client: AsyncClient | None = None
    _channel: object | None = None

    async def subscribe(
        self,
        on_change: Callable[[dict[str, object]], None],
        on_status: Callable[[ChannelStatus], None],
    ) -> None:
        """Open the channel and forward change payloads and status updates."""

        def handle_status(state: object, error: Exception | None = None) -> None:
            status = _parse_status(state)
            if status is None:
                return
            if error is not None:
                logger.warning("Realtime channel error: %s", error)
            on_status(status)

        with remote_call("subscribe to listing changes"):
            if self._client is None:
                self._client = await acreate_client(
                    self.supabase_url, self.supabase_key
                )
            channel = self._client.channel(self.channel_name)
            channel.on_postgres_changes(
                "*", schema=self.schema, table=self.table, callback=on_change
            )
            await channel.subscribe(handle_status)
        self._channel = channel

    async def unsubscribe(self) -> None:
        """Remove the channel from the realtime client."""
        if self._client is None or self._channel is None:
            return
        with remote_call("unsubscribe from listing changes"):
            await self._client.remove_channel(self._channel)
        self._channel = None


def _parse_status(state: object) -> ChannelStatus | None:
    raw = getattr(state, "value", state)
    try:
        return ChannelStatus(str(raw).upper())
    except ValueError:
        return None
