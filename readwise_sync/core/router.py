"""Route exported documents to per-category outline files."""

from pathlib import Path
from typing import Iterable

from ..models.config import sanitize_filename
from ..models.export import SourceDocument
from .renderer import write_document


class RecordRouter:
    """Writes each document to ``<output_root>/<category>/<title>.org``."""

    FILE_EXTENSION = ".org"

    def __init__(self, output_root: Path) -> None:
        self.output_root = Path(output_root)

    def document_path(self, document: SourceDocument) -> Path:
        """Target path for a document (category and title sanitized)."""
        category_dir = self.output_root / sanitize_filename(document.category)
        return category_dir / f"{sanitize_filename(document.title)}{self.FILE_EXTENSION}"

    def process_results(self, results: Iterable[SourceDocument]) -> list[Path]:
        """Write every document in input order.

        Documents are not deduplicated; a later document with the same
        target path overwrites an earlier one.

        Returns:
            Paths written, in order
        """
        written = []
        for document in results:
            path = self.document_path(document)
            path.parent.mkdir(parents=True, exist_ok=True)
            written.append(write_document(path, document, document.highlights))
        return written
