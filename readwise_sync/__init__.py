"""Export Readwise highlights as Org-roam outline files."""

from .errors import AuthError, MalformedResponseError, ReadwiseAPIError, ReadwiseSyncError

__version__ = "0.1.0"

__all__ = [
    "AuthError",
    "MalformedResponseError",
    "ReadwiseAPIError",
    "ReadwiseSyncError",
    "__version__",
]
