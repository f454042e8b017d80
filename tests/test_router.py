"""Tests for routing documents into category directories."""

from pathlib import Path

from readwise_sync.core.router import RecordRouter
from readwise_sync.models.export import Highlight, SourceDocument


class TestRecordRouter:
    """Tests for RecordRouter."""

    def test_document_path_sanitized(self, tmp_path: Path, book: SourceDocument) -> None:
        router = RecordRouter(tmp_path)

        assert router.document_path(book) == tmp_path / "books" / "A-B--Test-.org"

    def test_process_results_creates_category_dirs(self, tmp_path: Path) -> None:
        router = RecordRouter(tmp_path)
        docs = [
            SourceDocument(id=1, title="One", category="books"),
            SourceDocument(id=2, title="Two", category="articles"),
        ]

        written = router.process_results(docs)

        assert written == [tmp_path / "books" / "One.org", tmp_path / "articles" / "Two.org"]
        assert all(p.exists() for p in written)

    def test_existing_category_dir(self, tmp_path: Path) -> None:
        (tmp_path / "books").mkdir()
        router = RecordRouter(tmp_path)

        router.process_results([SourceDocument(id=1, title="One", category="books")])

        assert (tmp_path / "books" / "One.org").exists()

    def test_empty_results(self, tmp_path: Path) -> None:
        router = RecordRouter(tmp_path)

        assert router.process_results([]) == []
        assert list(tmp_path.iterdir()) == []

    def test_last_write_wins(self, tmp_path: Path) -> None:
        router = RecordRouter(tmp_path)
        first = SourceDocument(
            id=1, title="Same", category="books", highlights=(Highlight(id=1, text="old"),)
        )
        second = SourceDocument(
            id=1, title="Same", category="books", highlights=(Highlight(id=2, text="new"),)
        )

        router.process_results([first, second])

        text = (tmp_path / "books" / "Same.org").read_text(encoding="utf-8")
        assert "new" in text
        assert "old" not in text
