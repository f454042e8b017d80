"""Shared pytest fixtures for sync tests."""

from typing import Any

import pytest

from readwise_sync.models.export import SourceDocument


@pytest.fixture
def book_data() -> dict[str, Any]:
    """A single export result with two highlights, one with a note."""
    return {
        "user_book_id": 42,
        "title": "A/B: Test?",
        "author": "Jane\nDoe",
        "category": "books",
        "source_url": "https://example.com/book",
        "summary": "A short summary.",
        "highlights": [
            {
                "id": 1,
                "text": "First highlight",
                "note": "",
                "url": "https://example.com/book#1",
                "readwise_url": "https://readwise.io/open/1",
                "updated_at": "2024-01-01T10:00:00Z",
            },
            {
                "id": 2,
                "text": "Second highlight",
                "note": "My note",
                "url": None,
                "readwise_url": "https://readwise.io/open/2",
                "updated_at": "2024-03-05T09:30:00.123Z",
            },
        ],
    }


@pytest.fixture
def book(book_data: dict[str, Any]) -> SourceDocument:
    return SourceDocument.from_dict(book_data)
