"""Realtime change events for the announcements table."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID


class EventType(StrEnum):
    """Kinds of row changes delivered by the realtime channel."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChannelStatus(StrEnum):
    """Subscription states reported by the realtime channel."""

    SUBSCRIBED = "SUBSCRIBED"
    CHANNEL_ERROR = "CHANNEL_ERROR"
    TIMED_OUT = "TIMED_OUT"
    CLOSED = "CLOSED"

    @property
    def connected(self) -> bool:
        """Return True when events are flowing."""
        return self is ChannelStatus.SUBSCRIBED


@dataclass(frozen=True)
class ChangeEvent:
    """A single row change with its new and old field values."""

    event_type: EventType
    new: dict[str, object] = field(default_factory=dict)
    old: dict[str, object] = field(default_factory=dict)

    @property
    def record_id(self) -> UUID | None:
        """Return the affected row id (old id for deletes, new id otherwise)."""
        source = self.old if self.event_type is EventType.DELETE else self.new
        raw = source.get("id") or self.old.get("id")
        return UUID(str(raw)) if raw else None


def change_event_from_payload(payload: dict[str, object]) -> ChangeEvent | None:
    """Normalize a realtime payload into a change event.

    Accepts the client shape ``{"eventType", "new", "old"}`` as well as the
    wire shape ``{"data": {"type", "record", "old_record"}}``. Returns None for
    payloads that are not row changes.
    """
    data = payload.get("data")
    if isinstance(data, dict):
        raw_type = data.get("type") or data.get("eventType")
        new = data.get("record") or data.get("new") or {}
        old = data.get("old_record") or data.get("old") or {}
    else:
        raw_type = payload.get("eventType") or payload.get("type")
        new = payload.get("new") or payload.get("record") or {}
        old = payload.get("old") or payload.get("old_record") or {}
    try:
        event_type = EventType(str(raw_type).upper())
    except ValueError:
        return None
    return ChangeEvent(
        event_type=event_type,
        new=dict(new) if isinstance(new, dict) else {},
        old=dict(old) if isinstance(old, dict) else {},
    )
