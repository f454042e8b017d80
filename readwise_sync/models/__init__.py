"""Data models for sync system."""

from .config import (
    AuthSettings,
    SyncConfig,
    SyncSettings,
    sanitize_filename,
)
from .export import ExportPage, Highlight, SourceDocument

__all__ = [
    "AuthSettings",
    "ExportPage",
    "Highlight",
    "SourceDocument",
    "SyncConfig",
    "SyncSettings",
    "sanitize_filename",
]
