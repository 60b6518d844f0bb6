"""Typed success/failure results returned by page views."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from donation_board.domain.errors import (
    NotFoundError,
    PermissionDeniedError,
    RemoteCallError,
    ValidationError,
)

T = TypeVar("T")


class FailureKind(StrEnum):
    """Categories of recoverable failures."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    REMOTE = "remote"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """A failed outcome the user can recover from."""

    kind: FailureKind
    message: str
    retryable: bool = False

    @classmethod
    def from_exception(cls, exc: Exception) -> "Failure":
        """Map an application exception to a failure."""
        if isinstance(exc, ValidationError):
            return cls(kind=FailureKind.VALIDATION, message=str(exc))
        if isinstance(exc, NotFoundError):
            return cls(kind=FailureKind.NOT_FOUND, message=str(exc))
        if isinstance(exc, PermissionDeniedError):
            return cls(kind=FailureKind.FORBIDDEN, message=str(exc))
        if isinstance(exc, RemoteCallError):
            return cls(kind=FailureKind.REMOTE, message=str(exc), retryable=True)
        raise TypeError(f"Unsupported exception type: {type(exc).__name__}")
