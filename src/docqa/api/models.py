"""Pydantic models for the document Q&A API."""

from pydantic import BaseModel, Field

from docqa.core.models import InteractionRecord, SessionStatus

# Error codes carried in ``{"detail": ..., "code": ...}`` bodies
CODE_UNSUPPORTED_ARTIFACT = "UNSUPPORTED_ARTIFACT"
CODE_EXTRACTION_FAILED = "EXTRACTION_FAILED"
CODE_ARTIFACT_TOO_LARGE = "ARTIFACT_TOO_LARGE"
CODE_MISSING_PRECONDITION = "MISSING_PRECONDITION"
CODE_ANSWERING_FAILED = "ANSWERING_FAILED"
CODE_HISTORY_LOAD_FAILED = "HISTORY_LOAD_FAILED"


class ExtractResponse(BaseModel):
    """Text extracted from one uploaded artifact."""

    name: str = Field(description="Uploaded file name")
    media_type: str = Field(description="Declared media type")
    text: str = Field(description="Normalized context text")


class QARequest(BaseModel):
    """Request model for the Q&A endpoint."""

    question: str = Field(default="", description="Question to ask")
    context: str = Field(default="", description="Document text to ask against")
    user_id: str | None = Field(
        default=None,
        description="Owner of the history record; falls back to the configured session",
    )


class QAResponse(BaseModel):
    """Outcome of one Q&A submission."""

    status: SessionStatus
    answer: str = Field(description="Trimmed answer text")


class HistoryResponse(BaseModel):
    """A user's records, partitioned by kind in service order."""

    summaries: list[InteractionRecord] = Field(default_factory=list)
    qas: list[InteractionRecord] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    detail: str
    code: str
