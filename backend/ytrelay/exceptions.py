"""Error types raised by the relay services."""

from fastapi import status


class RelayError(Exception):
    """Base class for errors translated into HTTP responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(RelayError):
    """Raised when the client sent missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(RelayError):
    """Raised when OAuth configuration, code exchange or token refresh fails."""


class UploadError(RelayError):
    """Raised when YouTube rejects or fails the video insert."""


class PersistenceWarning(RelayError):
    """Raised by the token store when the token file cannot be read or written."""
