"""Tests for the HTTP API, driven in-process through ASGITransport."""

from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from fastapi import UploadFile

from docqa.api.documents import extract_document
from docqa.api.exceptions import ArtifactTooLarge
from docqa.app import get_app
from docqa.configs.config import get_ingestion_config, get_session_config
from docqa.configs.system import IngestionConfig, SessionConfig
from docqa.core.errors import AnsweringServiceFailure, HistoryLoadFailure
from docqa.core.extraction import TextExtractor
from docqa.core.models import KIND_QA, KIND_SUMMARY, InteractionRecord
from docqa.infra.background import BestEffortTasks


@pytest.fixture
def app(answering, history):
    app = get_app()
    app.state.answering_client = answering
    app.state.history_client = history
    app.state.background_tasks = BestEffortTasks()
    app.dependency_overrides[get_session_config] = lambda: SessionConfig()
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class TestExtractEndpoint:
    @pytest.mark.asyncio
    async def test_plain_text(self, client):
        response = await client.post(
            "/api/v1/documents/extract",
            files={"file": ("notes.txt", b"line one\nline two", "text/plain")},
        )
        assert response.status_code == 200
        assert response.json() == {
            "name": "notes.txt",
            "media_type": "text/plain",
            "text": "line one\nline two",
        }

    @pytest.mark.asyncio
    async def test_pdf(self, client, make_pdf):
        response = await client.post(
            "/api/v1/documents/extract",
            files={"file": ("a.pdf", make_pdf("Page one", "Page two"), "application/pdf")},
        )
        assert response.status_code == 200
        assert response.json()["text"] == "Page one\nPage two"

    @pytest.mark.asyncio
    async def test_unsupported_type(self, client):
        response = await client.post(
            "/api/v1/documents/extract",
            files={"file": ("a.png", b"\x89PNG", "image/png")},
        )
        assert response.status_code == 415
        assert response.json()["code"] == "UNSUPPORTED_ARTIFACT"

    @pytest.mark.asyncio
    async def test_corrupt_pdf(self, client):
        response = await client.post(
            "/api/v1/documents/extract",
            files={"file": ("a.pdf", b"", "application/pdf")},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "EXTRACTION_FAILED"

    @pytest.mark.asyncio
    async def test_too_large(self, app, client):
        app.dependency_overrides[get_ingestion_config] = lambda: IngestionConfig(
            max_upload_bytes=4
        )
        response = await client.post(
            "/api/v1/documents/extract",
            files={"file": ("big.txt", b"0123456789", "text/plain")},
        )
        assert response.status_code == 413
        assert response.json()["code"] == "ARTIFACT_TOO_LARGE"

    @pytest.mark.asyncio
    async def test_exactly_at_limit(self, app, client):
        app.dependency_overrides[get_ingestion_config] = lambda: IngestionConfig(
            max_upload_bytes=4
        )
        response = await client.post(
            "/api/v1/documents/extract",
            files={"file": ("ok.txt", b"0123", "text/plain")},
        )
        assert response.status_code == 200
        assert response.json()["text"] == "0123"

    @pytest.mark.asyncio
    async def test_declared_size_rejected_before_reading(self):
        upload = AsyncMock(spec=UploadFile)
        upload.filename, upload.content_type, upload.size = "big.txt", "text/plain", 100
        with pytest.raises(ArtifactTooLarge):
            await extract_document(upload, TextExtractor(), IngestionConfig(max_upload_bytes=4))
        upload.read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_read_is_bounded_when_size_unknown(self):
        upload = AsyncMock(spec=UploadFile)
        upload.filename, upload.content_type, upload.size = "big.txt", "text/plain", None
        upload.read.return_value = b"01234"
        with pytest.raises(ArtifactTooLarge):
            await extract_document(upload, TextExtractor(), IngestionConfig(max_upload_bytes=4))
        upload.read.assert_awaited_once_with(5)


# ---------------------------------------------------------------------------
# Q&A
# ---------------------------------------------------------------------------


class TestQAEndpoint:
    @pytest.mark.asyncio
    async def test_answer_and_history_write(self, app, client, answering, history):
        answering.ask.return_value = " 42 \n"
        response = await client.post(
            "/api/v1/qa",
            json={"question": "Meaning?", "context": "Guide", "user_id": "u1"},
        )
        await app.state.background_tasks.drain()

        assert response.status_code == 200
        assert response.json() == {"status": "answered", "answer": "42"}
        history.save.assert_awaited_once()
        record = history.save.await_args.args[0]
        assert record.kind == KIND_QA
        assert record.query == "Q: Meaning?\n\nContext:\nGuide"

    @pytest.mark.asyncio
    async def test_user_from_session_config(self, app, client, history):
        app.dependency_overrides[get_session_config] = lambda: SessionConfig(
            user_id="configured"
        )
        await client.post("/api/v1/qa", json={"question": "q", "context": "c"})
        await app.state.background_tasks.drain()
        assert history.save.await_args.args[0].user_id == "configured"

    @pytest.mark.asyncio
    async def test_no_user_skips_history(self, app, client, history):
        response = await client.post("/api/v1/qa", json={"question": "q", "context": "c"})
        await app.state.background_tasks.drain()
        assert response.status_code == 200
        history.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_question(self, client, answering):
        response = await client.post("/api/v1/qa", json={"question": "", "context": "c"})
        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_PRECONDITION"
        answering.ask.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_answering_failure(self, client, answering, history):
        answering.ask.side_effect = AnsweringServiceFailure("HTTP 500")
        response = await client.post(
            "/api/v1/qa", json={"question": "q", "context": "c", "user_id": "u1"}
        )
        assert response.status_code == 502
        assert response.json()["code"] == "ANSWERING_FAILED"
        history.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_history_failure_does_not_fail_request(self, app, client, history):
        history.save = AsyncMock(side_effect=RuntimeError("history down"))
        response = await client.post(
            "/api/v1/qa", json={"question": "q", "context": "c", "user_id": "u1"}
        )
        await app.state.background_tasks.drain()
        assert response.status_code == 200


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class TestHistoryEndpoint:
    @pytest.mark.asyncio
    async def test_partitions(self, client, history, record_payload):
        history.fetch.return_value = [
            InteractionRecord.model_validate(record_payload(k, n))
            for n, k in enumerate([KIND_SUMMARY, KIND_QA, KIND_SUMMARY])
        ]
        response = await client.get("/api/v1/history/u1")

        assert response.status_code == 200
        body = response.json()
        assert [r["id"] for r in body["summaries"]] == ["rec0", "rec2"]
        assert [r["id"] for r in body["qas"]] == ["rec1"]
        assert body["qas"][0]["type"] == "qa"
        history.fetch.assert_awaited_once_with("u1")

    @pytest.mark.asyncio
    async def test_fetch_failure(self, client, history):
        history.fetch.side_effect = HistoryLoadFailure("HTTP 500")
        response = await client.get("/api/v1/history/u1")
        assert response.status_code == 502
        assert response.json() == {
            "detail": "Failed to fetch history",
            "code": "HISTORY_LOAD_FAILED",
        }

    @pytest.mark.asyncio
    async def test_session_user(self, app, client, history):
        app.dependency_overrides[get_session_config] = lambda: SessionConfig(
            user_id="configured"
        )
        response = await client.get("/api/v1/history")
        assert response.status_code == 200
        assert response.json() == {"summaries": [], "qas": []}
        history.fetch.assert_awaited_once_with("configured")

    @pytest.mark.asyncio
    async def test_session_user_missing(self, client, history):
        response = await client.get("/api/v1/history")
        assert response.status_code == 400
        assert response.json() == {
            "detail": "User not found",
            "code": "MISSING_PRECONDITION",
        }
        history.fetch.assert_not_awaited()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "ok"}
