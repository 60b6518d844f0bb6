"""Client state shared by all page views.

Only the theme flag crosses the persistence boundary. The session user, the
loading flag and the notification queue live for the lifetime of the process.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import BaseModel, ConfigDict, ValidationError

from donation_board.domain.models import SessionUser
from donation_board.domain.notifications import Notification, NotificationKind

logger = logging.getLogger(__name__)


class PersistedPreferences(BaseModel):
    """The subset of client state written to durable storage."""

    model_config = ConfigDict(extra="ignore")

    is_dark_mode: bool = False


class PreferencesStorage(Protocol):
    """Durable key-value storage for persisted client state."""

    def load(self) -> dict[str, object] | None:
        """Return the stored state, if any."""

    def save(self, state: dict[str, object]) -> None:
        """Replace the stored state."""


@dataclass
class Appearance:
    """Document-level visual mode toggled by the theme flag."""

    classes: set[str] = field(default_factory=set)

    @property
    def mode(self) -> str:
        """Return `dark` or `light`."""
        return "dark" if "dark" in self.classes else "light"

    def apply(self, is_dark: bool) -> None:
        """Toggle the dark class."""
        if is_dark:
            self.classes.add("dark")
        else:
            self.classes.discard("dark")


@dataclass
class ClientStateStore:
    """Explicit, injectable application state."""

    storage: PreferencesStorage
    apply_visual_mode: Callable[[bool], None]
    user: SessionUser | None = None
    is_loading: bool = True
    notifications: list[Notification] = field(default_factory=list)
    is_dark_mode: bool = False

    @classmethod
    def restore(
        cls,
        storage: PreferencesStorage,
        apply_visual_mode: Callable[[bool], None],
    ) -> "ClientStateStore":
        """Create a store from persisted preferences and re-apply the theme."""
        preferences = _load_preferences(storage)
        store = cls(
            storage=storage,
            apply_visual_mode=apply_visual_mode,
            is_dark_mode=preferences.is_dark_mode,
        )
        apply_visual_mode(store.is_dark_mode)
        return store

    def set_user(self, user: SessionUser | None) -> None:
        """Replace the session user."""
        self.user = user

    def set_loading(self, is_loading: bool) -> None:
        """Set the global loading flag."""
        self.is_loading = is_loading

    def add_notification(self, notification: Notification) -> Notification:
        """Append a notification to the queue."""
        self.notifications.append(notification)
        return notification

    def remove_notification(self, notification_id: str) -> None:
        """Remove a notification by id."""
        self.notifications = [
            item for item in self.notifications if item.id != notification_id
        ]

    def set_dark_mode(self, is_dark: bool) -> None:
        """Set the theme flag, apply it and persist it.

        A failed write keeps the theme for this session and queues an error
        notification.
        """
        self.apply_visual_mode(is_dark)
        self.is_dark_mode = is_dark
        try:
            self.storage.save(self.persisted_state())
        except OSError:
            logger.exception("Failed to save preferences")
            self.add_notification(
                Notification(
                    message="Could not save your theme preference",
                    kind=NotificationKind.ERROR,
                )
            )

    def persisted_state(self) -> dict[str, object]:
        """Serialize the persisted subset of the state."""
        return PersistedPreferences(is_dark_mode=self.is_dark_mode).model_dump()


def _load_preferences(storage: PreferencesStorage) -> PersistedPreferences:
    raw = storage.load()
    if raw is None:
        return PersistedPreferences()
    try:
        return PersistedPreferences.model_validate(raw)
    except ValidationError:
        logger.warning("Ignoring invalid persisted preferences")
        return PersistedPreferences()
