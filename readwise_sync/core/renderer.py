"""Render a source document and its highlights as an Org outline file."""

import logging
import os
from pathlib import Path
from typing import Iterable

from ..models.export import Highlight, SourceDocument

logger = logging.getLogger(__name__)


def last_updated(highlights: Iterable[Highlight]) -> str | None:
    """Latest highlight ``updated_at`` as ``YYYY-MM-DD HH:MM:SS``.

    ISO-8601 strings sort in time order, so the lexicographic maximum is the
    latest one. Returns None when there are no timestamps.
    """
    stamps = [h.updated_at for h in highlights if h.updated_at]
    if not stamps:
        return None
    return max(stamps).replace("T", " ", 1)[:19]


def _one_line(value: str) -> str:
    """Collapse newlines to spaces so the value fits a single Org line."""
    return " ".join(value.splitlines())


def _drawer(properties: list[tuple[str, str]]) -> list[str]:
    lines = [":PROPERTIES:"]
    lines.extend(f":{key}: {value}" for key, value in properties)
    lines.append(":END:")
    return lines


def render_header(document: SourceDocument, highlights: tuple[Highlight, ...]) -> list[str]:
    """File-level property drawer, title line and optional summary."""
    properties = [("ID", str(document.id))]
    if document.author:
        properties.append(("AUTHOR", _one_line(document.author)))
    if document.source_url:
        properties.append(("URL", document.source_url))
    updated = last_updated(highlights)
    if updated:
        properties.append(("LAST-UPDATED", updated))

    lines = _drawer(properties)
    lines.append(f"#+title: {_one_line(document.title)}")
    lines.append("")

    if document.summary:
        lines.append("* Summary")
        lines.append(document.summary)
        lines.append("")
    return lines


def render_highlight(highlight: Highlight) -> list[str]:
    """One ``* Highlight <id>`` entry, plus a ``** Note`` when there is a note."""
    properties = [("ID", str(highlight.id))]
    if highlight.url:
        properties.append(("URL", highlight.url))

    lines = [f"* Highlight {highlight.id}"]
    lines.extend(_drawer(properties))
    lines.append(f"{highlight.text} ([[{highlight.readwise_url}][View Highlight]])")
    lines.append("")

    if highlight.note:
        lines.append("** Note")
        lines.extend(_drawer([("ID", f"{highlight.id}-note")]))
        lines.append(highlight.note)
        lines.append("")
    return lines


def render_document(
    document: SourceDocument,
    highlights: Iterable[Highlight] | None = None,
) -> str:
    """Render the full outline text for a document.

    Args:
        document: Source document
        highlights: Highlights to render (the document's own by default)
    """
    items = tuple(document.highlights if highlights is None else highlights)
    lines = render_header(document, items)
    for highlight in items:
        lines.extend(render_highlight(highlight))
    return "\n".join(lines) + "\n"


def write_document(
    file_path: Path,
    document: SourceDocument,
    highlights: Iterable[Highlight] | None = None,
) -> Path:
    """Write the outline for a document, replacing any previous content.

    The file is flushed and fsync'd before returning.
    """
    file_path = Path(file_path)
    content = render_document(document, highlights)

    with open(file_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)
        f.flush()
        os.fsync(f.fileno())

    logger.debug("Wrote %s", file_path)
    return file_path
