"""Core sync functionality."""

from .auth import CredentialResolver, PasswordStoreBackend, StandardBackend
from .client import Exporter, ReadwiseClient
from .operations import SyncOperations, SyncResult
from .reindex import Reindexer
from .renderer import render_document, write_document
from .router import RecordRouter

__all__ = [
    "CredentialResolver",
    "Exporter",
    "PasswordStoreBackend",
    "ReadwiseClient",
    "RecordRouter",
    "Reindexer",
    "StandardBackend",
    "SyncOperations",
    "SyncResult",
    "render_document",
    "write_document",
]
