"""Trigger the knowledge-base reindex after a completed sync."""

import logging
import subprocess

logger = logging.getLogger(__name__)


class Reindexer:
    """Runs an external reindex command, e.g. ``emacsclient --eval "(org-roam-db-sync)"``."""

    def __init__(self, command: list[str] | None = None) -> None:
        self.command = list(command) if command else None

    def __call__(self) -> bool:
        if not self.command:
            logger.info("No reindex command configured; skipping reindex")
            return False

        logger.debug("Running reindex command: %s", " ".join(self.command))
        try:
            subprocess.run(self.command, check=True, capture_output=True, text=True)
        except FileNotFoundError:
            logger.error("Reindex command not found: %s", self.command[0])
            return False
        except subprocess.CalledProcessError as e:
            logger.error(
                "Reindex command failed with exit code %d: %s",
                e.returncode,
                (e.stderr or "").strip(),
            )
            return False
        return True
