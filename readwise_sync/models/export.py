"""Records parsed from the Readwise export endpoint."""

from dataclasses import dataclass, field
from typing import Any

from ..errors import MalformedResponseError


def _require(data: dict[str, Any], key: str, kind: str) -> Any:
    """Return data[key] or raise MalformedResponseError naming the record kind."""
    if key not in data or data[key] is None:
        raise MalformedResponseError(f"{kind} record is missing '{key}'")
    return data[key]


def _as_int(value: Any, key: str, kind: str) -> int:
    """Convert an identifier to int, rejecting anything that is not integral."""
    if isinstance(value, bool):
        raise MalformedResponseError(f"{kind} '{key}' is not an integer: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"{kind} '{key}' is not an integer: {value!r}") from e


def _require_str(data: dict[str, Any], key: str, kind: str) -> str:
    value = _require(data, key, kind)
    if not isinstance(value, str):
        raise MalformedResponseError(f"{kind} '{key}' is not a string: {value!r}")
    return value


def _optional_str(data: dict[str, Any], key: str, kind: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedResponseError(f"{kind} '{key}' is not a string: {value!r}")
    return value


@dataclass(frozen=True)
class Highlight:
    """A single highlight within a source document."""

    id: int
    text: str
    readwise_url: str = ""
    updated_at: str = ""  # ISO-8601
    note: str | None = None
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Highlight":
        """Create from an export API highlight object."""
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Highlight record is not an object: {data!r}")
        return cls(
            id=_as_int(_require(data, "id", "Highlight"), "id", "Highlight"),
            text=_require_str(data, "text", "Highlight"),
            readwise_url=_optional_str(data, "readwise_url", "Highlight") or "",
            updated_at=_optional_str(data, "updated_at", "Highlight") or "",
            note=_optional_str(data, "note", "Highlight"),
            url=_optional_str(data, "url", "Highlight"),
        )


@dataclass(frozen=True)
class SourceDocument:
    """A source document ("book") with its highlights.

    Readwise calls the identifier ``user_book_id``; ``id`` is accepted as well.
    """

    id: int
    title: str
    category: str
    author: str | None = None
    source_url: str | None = None
    summary: str | None = None
    highlights: tuple[Highlight, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceDocument":
        """Create from an export API result object."""
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Document record is not an object: {data!r}")

        doc_id = data.get("user_book_id", data.get("id"))
        if doc_id is None:
            raise MalformedResponseError("Document record is missing 'user_book_id'")

        raw_highlights = data.get("highlights") or []
        if not isinstance(raw_highlights, list):
            raise MalformedResponseError(
                f"Document {doc_id}: 'highlights' is not a list"
            )

        return cls(
            id=_as_int(doc_id, "user_book_id", "Document"),
            title=_require_str(data, "title", "Document"),
            category=_require_str(data, "category", "Document"),
            author=_optional_str(data, "author", "Document"),
            source_url=_optional_str(data, "source_url", "Document"),
            summary=_optional_str(data, "summary", "Document"),
            highlights=tuple(Highlight.from_dict(h) for h in raw_highlights),
        )


@dataclass(frozen=True)
class ExportPage:
    """One page of the export endpoint: results plus the next cursor."""

    results: tuple[SourceDocument, ...] = ()
    next_cursor: str | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    @classmethod
    def from_dict(cls, data: Any) -> "ExportPage":
        """Create from the decoded JSON body.

        A body without ``results`` is an empty page; anything else that does
        not look like an export page raises MalformedResponseError.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Export page is not an object: {type(data).__name__}")

        raw_results = data.get("results")
        if raw_results is None:
            raw_results = []
        elif not isinstance(raw_results, list):
            raise MalformedResponseError("Export page 'results' is not a list")

        # Readwise sends integer cursors; 0 is a valid one
        cursor = data.get("nextPageCursor")

        return cls(
            results=tuple(SourceDocument.from_dict(r) for r in raw_results),
            next_cursor=None if cursor is None or cursor == "" else str(cursor),
        )
