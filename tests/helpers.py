"""Test doubles shared across test modules."""

from typing import Any
from unittest.mock import MagicMock


def make_response(data: Any = None, status_code: int = 200, text: str = "") -> MagicMock:
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = b"" if data is None else b"{}"
    response.json.return_value = data
    return response


class FakeBackend:
    """Secret backend returning a fixed value and recording lookups."""

    def __init__(self, value: Any) -> None:
        self.value = value
        self.hosts: list[str] = []

    def search(self, host: str) -> Any:
        self.hosts.append(host)
        return self.value
