"""Exception types shared across the sync system."""

from typing import Any


class ReadwiseSyncError(Exception):
    """Base class for all sync errors."""


class AuthError(ReadwiseSyncError):
    """Raised when no API token can be resolved for the Readwise host."""


class ReadwiseAPIError(ReadwiseSyncError):
    """Exception raised for Readwise API errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    @property
    def unauthorized(self) -> bool:
        return self.status_code == 401


class MalformedResponseError(ReadwiseSyncError):
    """Raised when an API response does not have the expected shape."""
