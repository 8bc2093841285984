"""Global exception handlers mapping pipeline errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docqa.core.errors import (
    AnsweringServiceFailure,
    ExtractionFailed,
    HistoryLoadFailure,
    MissingPrecondition,
    UnsupportedArtifact,
)

from .models import (
    CODE_ANSWERING_FAILED,
    CODE_ARTIFACT_TOO_LARGE,
    CODE_EXTRACTION_FAILED,
    CODE_HISTORY_LOAD_FAILED,
    CODE_MISSING_PRECONDITION,
    CODE_UNSUPPORTED_ARTIFACT,
    ErrorResponse,
)


class ArtifactTooLarge(Exception):
    """Raised when an upload exceeds ``ingestion.max_upload_bytes``."""


def _error(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on ``app``."""

    @app.exception_handler(UnsupportedArtifact)
    async def handle_unsupported(request: Request, exc: UnsupportedArtifact) -> JSONResponse:
        return _error(415, exc, CODE_UNSUPPORTED_ARTIFACT)

    @app.exception_handler(ExtractionFailed)
    async def handle_extraction_failed(
        request: Request, exc: ExtractionFailed
    ) -> JSONResponse:
        return _error(422, exc, CODE_EXTRACTION_FAILED)

    @app.exception_handler(ArtifactTooLarge)
    async def handle_too_large(request: Request, exc: ArtifactTooLarge) -> JSONResponse:
        return _error(413, exc, CODE_ARTIFACT_TOO_LARGE)

    @app.exception_handler(MissingPrecondition)
    async def handle_missing_precondition(
        request: Request, exc: MissingPrecondition
    ) -> JSONResponse:
        return _error(400, exc, CODE_MISSING_PRECONDITION)

    @app.exception_handler(AnsweringServiceFailure)
    async def handle_answering_failure(
        request: Request, exc: AnsweringServiceFailure
    ) -> JSONResponse:
        return _error(502, exc, CODE_ANSWERING_FAILED)

    @app.exception_handler(HistoryLoadFailure)
    async def handle_history_load_failure(
        request: Request, exc: HistoryLoadFailure
    ) -> JSONResponse:
        return _error(502, exc, CODE_HISTORY_LOAD_FAILED)
