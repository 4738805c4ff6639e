"""Exceptions raised by the journal services and the TMDB client.

Every exception carries the HTTP status code the API answers with, so
``main.py`` can render all of them through one handler.
"""


class JournalError(Exception):
    """Base exception for movie journal errors."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ValidationError(JournalError):
    """Raised when input is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(JournalError):
    """Raised when an id does not resolve to a stored movie."""

    status_code = 404
    default_message = "Resource not found"


class StorageError(JournalError):
    """Raised when a database operation fails."""

    status_code = 500
    default_message = "Storage operation failed"


class CatalogueFetchError(JournalError):
    """Raised when the external catalogue (TMDB) cannot be used.

    ``upstream_status`` holds the HTTP status TMDB answered with, or None when
    no response was received or the response could not be decoded.
    """

    status_code = 500
    default_message = "External catalogue error"

    def __init__(self, message: str | None = None, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status
