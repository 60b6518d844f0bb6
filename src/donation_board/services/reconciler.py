"""Realtime reconciliation of the local search result set.

Channel payloads are normalized into `ChangeEvent` messages and pushed onto a
queue. A single consumer applies them in arrival order through `reconcile`,
a pure function from (result set, event) to the next result set plus a flag
telling the caller whether a full re-query is needed.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Protocol

from donation_board.domain.events import (
    ChangeEvent,
    ChannelStatus,
    EventType,
    change_event_from_payload,
)
from donation_board.domain.listings import listing_from_row, listing_to_row
from donation_board.domain.search import ResultSet
from donation_board.services.query_builder import build_listing_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of applying one change event."""

    result_set: ResultSet
    refresh_required: bool = False


def reconcile(result_set: ResultSet, event: ChangeEvent) -> Reconciliation:
    """Apply one change event to the result set."""
    if event.event_type is EventType.INSERT:
        # Insertion position depends on sort order and filter; re-query instead.
        return Reconciliation(result_set, refresh_required=True)

    listing_id = event.record_id
    if listing_id is None:
        return Reconciliation(result_set)
    if event.event_type is EventType.DELETE:
        return _apply_delete(result_set, event)
    return _apply_update(result_set, event)


def _apply_delete(result_set: ResultSet, event: ChangeEvent) -> Reconciliation:
    listing_id = event.record_id
    if listing_id in result_set.removed_ids:
        return Reconciliation(result_set)

    removed_ids = result_set.remember_removed(listing_id)
    index = result_set.index_of(listing_id)
    if index is not None:
        items = result_set.items[:index] + result_set.items[index + 1 :]
        return Reconciliation(
            replace(
                result_set,
                items=items,
                total=max(result_set.total - 1, 0),
                removed_ids=removed_ids,
            )
        )

    query = build_listing_query(result_set.filters, result_set.page_size)
    remembered = replace(result_set, removed_ids=removed_ids)
    if not query.can_evaluate(event.old):
        # Key-only payload under a filter: the backend owns the count.
        return Reconciliation(remembered, refresh_required=True)
    if query.matches(event.old):
        # Matching row on another page: only the total moves.
        remembered = replace(remembered, total=max(result_set.total - 1, 0))
    return Reconciliation(remembered)


def _apply_update(result_set: ResultSet, event: ChangeEvent) -> Reconciliation:
    index = result_set.index_of(event.record_id)
    if index is None:
        return Reconciliation(result_set)

    merged = {**listing_to_row(result_set.items[index]), **event.new}
    query = build_listing_query(result_set.filters, result_set.page_size)
    if not query.matches(merged):
        return Reconciliation(result_set, refresh_required=True)

    updated = listing_from_row(merged)
    items = result_set.items[:index] + (updated,) + result_set.items[index + 1 :]
    return Reconciliation(replace(result_set, items=items))


class ChangeFeed(Protocol):
    """Realtime subscription to listing table changes."""

    async def subscribe(
        self,
        on_change: Callable[[dict[str, object]], None],
        on_status: Callable[[ChannelStatus], None],
    ) -> None:
        """Open the channel and start delivering payloads and status updates."""

    async def unsubscribe(self) -> None:
        """Close the channel."""


class ReconcileTarget(Protocol):
    """Holder of the result set the reconciler keeps current."""

    async def apply_change(self, event: ChangeEvent) -> None:
        """Apply one change event to the held result set."""

    async def refresh(self) -> None:
        """Re-run the active query."""


@dataclass
class RealtimeReconciler:
    """Consume channel messages in order and apply them to a target."""

    feed: ChangeFeed
    target: ReconcileTarget
    queue: asyncio.Queue = field(default_factory=asyncio.Queue)
    connected: bool = False
    _connection_lost: bool = False
    _task: asyncio.Task | None = None

    async def start(self) -> None:
        """Subscribe to the feed and start the consumer task."""
        if self._task is None:
            self._task = asyncio.create_task(self.run())
        await self.feed.subscribe(self.enqueue_payload, self.enqueue_status)

    async def stop(self) -> None:
        """Unsubscribe and stop consuming."""
        await self.feed.unsubscribe()
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        self.connected = False

    def enqueue_payload(self, payload: dict[str, object]) -> None:
        """Queue a raw channel payload as a change event."""
        event = change_event_from_payload(payload)
        if event is None:
            logger.debug("Ignoring non-change realtime payload")
            return
        self.queue.put_nowait(event)

    def enqueue_status(self, status: ChannelStatus) -> None:
        """Queue a channel status update."""
        self.queue.put_nowait(status)

    async def run(self) -> None:
        """Process queued messages until cancelled."""
        while True:
            message = await self.queue.get()
            try:
                await self.process(message)
            except Exception:
                logger.exception("Failed to apply realtime message")
            finally:
                self.queue.task_done()

    async def process(self, message: ChangeEvent | ChannelStatus) -> None:
        """Apply a single queued message."""
        if isinstance(message, ChannelStatus):
            await self._handle_status(message)
            return
        await self.target.apply_change(message)

    async def _handle_status(self, status: ChannelStatus) -> None:
        if status.connected:
            self.connected = True
            if self._connection_lost:
                logger.info("Realtime channel restored; resynchronizing results")
                self._connection_lost = False
                await self.target.refresh()
            return
        if self.connected or not self._connection_lost:
            logger.warning("Realtime channel unavailable: %s", status.value)
        self.connected = False
        self._connection_lost = True
