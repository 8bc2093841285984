"""HTTP clients for the remote answering and history services.

Both clients share one ``httpx.AsyncClient`` owned by the caller
(the API lifespan or the CLI), and translate every transport or
payload problem into a domain exception.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated
from urllib.parse import quote

import httpx
from fastapi import Depends, FastAPI, Request
from pydantic import BaseModel, TypeAdapter, ValidationError

from docqa.configs.config import get_services_config
from docqa.configs.system import ServicesConfig
from docqa.core.errors import (
    AnsweringServiceFailure,
    HistoryLoadFailure,
    HistoryWriteFailure,
)
from docqa.core.models import HistoryWrite, InteractionRecord
from docqa.infra.background import BestEffortTasks
from docqa.infra.lifespan import get_app

logger = logging.getLogger(__name__)

_SAVE_PATH = "save"
_JSON_HEADERS = {"Content-Type": "application/json"}

_records_adapter = TypeAdapter(list[InteractionRecord])


def build_http_client(config: ServicesConfig) -> httpx.AsyncClient:
    """Create the shared async HTTP client for both services."""
    return httpx.AsyncClient(
        timeout=config.request_timeout.total_seconds(),
        headers=_JSON_HEADERS,
    )


class AnswerPayload(BaseModel):
    """Success body of the answering service."""

    answer: str | None = None


class AnsweringClient:
    """POSTs ``{question, context}`` and returns the raw answer text."""

    def __init__(self, endpoint: str, http: httpx.AsyncClient) -> None:
        self._endpoint = endpoint
        self._http = http

    @classmethod
    def from_config(
        cls, config: ServicesConfig, http: httpx.AsyncClient
    ) -> "AnsweringClient":
        return cls(config.answering_endpoint, http)

    async def ask(self, question: str, context: str) -> str:
        """Return the service's answer, untrimmed.

        Raises:
            AnsweringServiceFailure: on network errors, non-2xx responses
                or a body that is not ``{"answer": ...}``.
        """
        try:
            response = await self._http.post(
                self._endpoint,
                json={"question": question, "context": context},
            )
            response.raise_for_status()
            payload = AnswerPayload.model_validate(response.json())
        except httpx.HTTPStatusError as exc:
            raise AnsweringServiceFailure(
                f"Answering service returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise AnsweringServiceFailure(
                f"Answering service unreachable: {exc}"
            ) from exc
        except ValueError as exc:
            raise AnsweringServiceFailure(
                "Answering service returned a malformed response"
            ) from exc
        return payload.answer or ""


class HistoryClient:
    """Reads and appends interaction records for a user."""

    def __init__(self, base_url: str, http: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http

    @classmethod
    def from_config(
        cls, config: ServicesConfig, http: httpx.AsyncClient
    ) -> "HistoryClient":
        return cls(config.history_endpoint, http)

    async def save(self, record: HistoryWrite) -> None:
        """Append *record*. The response body is ignored."""
        url = f"{self._base_url}/{_SAVE_PATH}"
        try:
            response = await self._http.post(url, json=record.model_dump(by_alias=True))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise HistoryWriteFailure(
                f"History service returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise HistoryWriteFailure(f"History service unreachable: {exc}") from exc

    async def fetch(self, user_id: str) -> list[InteractionRecord]:
        """Return every record of *user_id* in the service's order."""
        url = f"{self._base_url}/{quote(user_id, safe='')}"
        try:
            response = await self._http.get(url)
            response.raise_for_status()
            return _records_adapter.validate_python(response.json())
        except httpx.HTTPStatusError as exc:
            raise HistoryLoadFailure(
                f"History service returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise HistoryLoadFailure(f"History service unreachable: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            raise HistoryLoadFailure(
                "History service returned a malformed response"
            ) from exc


# ---------------------------------------------------------------------------
# Lifespan dependency and per-request accessors
# ---------------------------------------------------------------------------


async def build_service_clients(
    app: Annotated[FastAPI, Depends(get_app)],
    config: Annotated[ServicesConfig, Depends(get_services_config)],
) -> AsyncGenerator[None, None]:
    """Create the shared HTTP client, both service clients and the
    best-effort task registry on ``app.state``; drain and close on exit."""
    http = build_http_client(config)
    app.state.http_client = http
    app.state.answering_client = AnsweringClient.from_config(config, http)
    app.state.history_client = HistoryClient.from_config(config, http)
    app.state.background_tasks = BestEffortTasks()
    logger.info(
        "Service clients ready (answering=%s, history=%s)",
        config.answering_endpoint,
        config.history_endpoint,
    )
    try:
        yield
    finally:
        await app.state.background_tasks.drain()
        await http.aclose()
        logger.info("Service clients closed.")


def get_answering_client(request: Request) -> AnsweringClient:
    """FastAPI dependency, reads from ``app.state``."""
    return request.app.state.answering_client


def get_history_client(request: Request) -> HistoryClient:
    """FastAPI dependency, reads from ``app.state``."""
    return request.app.state.history_client


def get_background_tasks(request: Request) -> BestEffortTasks:
    """FastAPI dependency, reads from ``app.state``."""
    return request.app.state.background_tasks
