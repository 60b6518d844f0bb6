"""Domain models for user-facing notifications."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import uuid4


class NotificationKind(StrEnum):
    """Notification severities."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    """A queued banner message."""

    message: str
    kind: NotificationKind = NotificationKind.INFO
    duration_ms: int | None = None
    retry_action: str | None = None
    id: str = field(default_factory=lambda: uuid4().hex)
