"""Shared fixtures."""

from datetime import datetime, timezone
from typing import Callable
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Build an in-memory PDF with one text line per page."""

    def _make(*pages: str) -> bytes:
        import pymupdf

        doc = pymupdf.open()
        for text in pages:
            page = doc.new_page()
            page.insert_text((72, 72), text)
        data = doc.tobytes()
        doc.close()
        return data

    return _make


@pytest.fixture
def record_payload() -> Callable[..., dict]:
    """Build one history record as the history service returns it."""

    def _make(kind: str, n: int = 0, user_id: str = "u1") -> dict:
        return {
            "_id": f"rec{n}",
            "userId": user_id,
            "query": f"query {n}",
            "response": f"response {n}",
            "type": kind,
            "createdAt": datetime(2024, 5, 1, 12, n, tzinfo=timezone.utc).isoformat(),
        }

    return _make


@pytest.fixture
def answering() -> AsyncMock:
    client = AsyncMock()
    client.ask.return_value = "answer"
    return client


@pytest.fixture
def history() -> AsyncMock:
    client = AsyncMock()
    client.save.return_value = None
    client.fetch.return_value = []
    return client
