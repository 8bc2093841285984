from datetime import timedelta

from pydantic import BaseModel, Field


class ServicesConfig(BaseModel):
    """Endpoints of the remote answering and history services."""

    answering_endpoint: str = Field(
        default="http://localhost:5001/api/question-answer",
        description="URL accepting POST {question, context} and returning {answer}",
    )
    history_endpoint: str = Field(
        default="http://localhost:5000/api/history",
        description="Base URL of the history service (save and per-user read)",
    )
    request_timeout: timedelta = Field(
        default=timedelta(seconds=120),
        description="Timeout applied to every outbound service call",
    )


class IngestionConfig(BaseModel):
    """Document ingestion settings."""

    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest artifact accepted by the upload endpoint",
    )


class SessionConfig(BaseModel):
    """Where the already-authenticated user identity comes from."""

    user_id: str = Field(
        default="",
        description="Explicit user id; takes precedence over session_file",
    )
    session_file: str = Field(
        default="",
        description='JSON file written by the login flow, e.g. {"userId": "..."}',
    )


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=False,
        description="Emit JSON lines instead of coloured dev output",
    )


class TracingConfig(BaseModel):
    """OpenTelemetry tracing settings."""

    enabled: bool = Field(default=False, description="Enable OTLP export")
    endpoint: str = Field(default="", description="OTLP HTTP traces endpoint")
    service_name: str = Field(default="docqa", description="Resource service.name")
    sample_rate: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Root sampling ratio"
    )
    excluded_urls: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Inbound URLs not traced by the FastAPI instrumentor",
    )


class APIConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=8000, description="API server port")
