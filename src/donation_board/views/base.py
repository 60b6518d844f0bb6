"""Error boundary shared by page views."""

import logging
from collections.abc import Callable
from typing import TypeVar

from donation_board.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    RemoteCallError,
    ValidationError,
)
from donation_board.domain.models import SessionUser
from donation_board.domain.notifications import Notification, NotificationKind
from donation_board.domain.results import Failure, Ok
from donation_board.services.store import ClientStateStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_action(
    store: ClientStateStore, action: str, operation: Callable[[], T]
) -> Ok[T] | Failure:
    """Run a user action, turning application errors into a Failure.

    Remote failures are logged and queued as a dismissible error banner with a
    retry action; validation and permission failures are returned for inline
    display only.
    """
    try:
        value = operation()
    except (ValidationError, NotFoundError, PermissionDeniedError) as exc:
        return Failure.from_exception(exc)
    except RemoteCallError as exc:
        logger.exception("Action %s failed", action)
        failure = Failure.from_exception(exc)
        notify_failure(store, action, failure)
        return failure
    return Ok(value)


def notify_failure(store: ClientStateStore, action: str, failure: Failure) -> None:
    """Queue an error banner for a failure."""
    store.add_notification(
        Notification(
            message=failure.message,
            kind=NotificationKind.ERROR,
            retry_action=action if failure.retryable else None,
        )
    )


def require_user(store: ClientStateStore, action: str) -> SessionUser:
    """Return the session user or raise a validation error."""
    if store.user is None:
        raise ValidationError(f"Please sign in to {action}")
    return store.user
