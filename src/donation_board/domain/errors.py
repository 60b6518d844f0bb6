"""Error taxonomy shared by services, adapters and views."""


class DonationBoardError(Exception):
    """Base class for application errors."""


class ValidationError(DonationBoardError, ValueError):
    """Raised when user input fails client-side validation."""


class NotFoundError(DonationBoardError, LookupError):
    """Raised when a requested record does not exist."""


class PermissionDeniedError(DonationBoardError, PermissionError):
    """Raised when a user acts on a record they do not own."""


class RemoteCallError(DonationBoardError, RuntimeError):
    """Raised when a call to the hosted backend fails.

    Adapters raise this instead of the SDK's own exception types, so the rest
    of the application never depends on vendor error shapes.
    """

    def __init__(self, operation: str, message: str, code: str | None = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
        self.code = code
