"""Sync driver: export everything from Readwise, then reindex."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ..models.config import SyncConfig
from .auth import CredentialResolver
from .client import Exporter, ReadwiseClient
from .reindex import Reindexer
from .router import RecordRouter

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Result of a sync run."""

    success: bool
    message: str
    pages: int = 0
    documents: int = 0
    reindexed: bool = False


class SyncOperations:
    """Runs a full export into the configured output directory."""

    def __init__(
        self,
        config: SyncConfig,
        client: ReadwiseClient | None = None,
        resolver: CredentialResolver | None = None,
        reindexer: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize sync operations.

        Args:
            config: Sync configuration
            client: ReadwiseClient (created if not provided)
            resolver: CredentialResolver (built from config.auth if not provided)
            reindexer: Called after a completed export (config.reindex_command by default)
        """
        self.config = config
        self._client = client
        self.resolver = resolver or CredentialResolver(config.auth)
        self.reindexer = reindexer or Reindexer(config.reindex_command)

    @property
    def client(self) -> ReadwiseClient:
        """Get or create ReadwiseClient."""
        if self._client is None:
            self._client = ReadwiseClient(
                base_url=self.config.base_url,
                timeout=self.config.settings.timeout,
            )
        return self._client

    @property
    def output_root(self) -> Path:
        return self.config.output_path

    def ensure_output_root(self) -> Path:
        """Create the output directory if needed."""
        root = self.output_root
        if root.is_dir():
            logger.info("Output directory %s already exists", root)
        else:
            root.mkdir(parents=True, exist_ok=True)
            logger.info("Created output directory %s", root)
        return root

    def sync(self) -> SyncResult:
        """Export all highlights and rewrite the outline files.

        Always a full export; no last-sync timestamp is stored or consulted.
        The reindex only runs once every page was processed.

        Raises:
            AuthError: If no API token can be resolved
        """
        root = self.ensure_output_root()
        exporter = Exporter(self.client, self.resolver, RecordRouter(root))
        reindexed = []

        def on_complete() -> None:
            reindexed.append(self.reindexer())
            logger.info(
                "Readwise sync complete: %d documents from %d pages",
                exporter.documents,
                exporter.pages,
            )

        completed = exporter.export(on_complete, updated_after=None)

        if not completed:
            return SyncResult(
                success=False,
                message="Export stopped before the last page; see log for details",
                pages=exporter.pages,
                documents=exporter.documents,
            )

        return SyncResult(
            success=True,
            message=f"Synced {exporter.documents} documents to {root}",
            pages=exporter.pages,
            documents=exporter.documents,
            reindexed=bool(reindexed and reindexed[0]),
        )
