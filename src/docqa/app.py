"""FastAPI application entry point."""

import logging
from typing import Annotated

import uvicorn
from fastapi import Depends, FastAPI

from docqa.api.documents import router as documents_router
from docqa.api.exceptions import register_exception_handlers
from docqa.api.history import router as history_router
from docqa.api.qa import router as qa_router
from docqa.configs.config import get_app_config
from docqa.infra.lifespan import inject
from docqa.infra.logging import setup_logging
from docqa.infra.services import build_service_clients
from docqa.infra.telemetry import build_telemetry

logger = logging.getLogger(__name__)


@inject
async def lifespan(
    app: FastAPI,
    _telemetry: Annotated[None, Depends(build_telemetry)],
    _services: Annotated[None, Depends(build_service_clients)],
):
    """Application lifespan: every resource is a ``Depends`` builder."""
    logger.info("docqa API started.")
    yield
    logger.info("Shutting down docqa API...")


def get_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="docqa",
        description="Ask questions about PDF and plain-text documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(documents_router)
    app.include_router(qa_router)
    app.include_router(history_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = get_app()


def serve() -> None:
    """Console entry point: run the API with uvicorn."""
    config = get_app_config()
    setup_logging(config.logging)
    uvicorn.run(
        "docqa.app:app",
        host=config.api.host,
        port=config.api.port,
        log_config=None,
    )
