"""Translate Supabase SDK failures into application errors."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from supabase import AuthError, PostgrestAPIError, StorageException

from donation_board.domain.errors import RemoteCallError

SDK_ERRORS = (PostgrestAPIError, StorageException, AuthError, httpx.HTTPError)


@contextmanager
def remote_call(operation: str) -> Iterator[None]:
    """Re-raise SDK and transport errors as RemoteCallError."""
    try:
        yield
    except SDK_ERRORS as exc:
        code = getattr(exc, "code", None)
        message = getattr(exc, "message", None) or str(exc)
        raise RemoteCallError(
            operation, str(message), code=str(code) if code else None
        ) from exc
