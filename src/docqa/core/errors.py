"""Pipeline exceptions.

Extraction and answering failures are user-visible. History writes are
best effort, so ``HistoryWriteFailure`` is only ever logged. History
loads surface ``HistoryLoadFailure`` as a distinct error state.
"""

from __future__ import annotations


class DocqaError(Exception):
    """Base class for every error raised by the pipeline."""


class ExtractionFailed(DocqaError):
    """Raised when an artifact cannot be decoded into text."""

    def __init__(self, message: str, *, artifact_name: str = "") -> None:
        super().__init__(message)
        self.artifact_name = artifact_name


class UnsupportedArtifact(DocqaError):
    """Raised when an artifact's media type is not PDF or plain text."""

    def __init__(self, media_type: str, *, artifact_name: str = "") -> None:
        super().__init__(f"Unsupported file type: {media_type or 'unknown'}")
        self.media_type = media_type
        self.artifact_name = artifact_name


class MissingPrecondition(DocqaError):
    """Raised when a required input (question, context, user id) is absent."""


class AnsweringServiceFailure(DocqaError):
    """Raised on network errors or non-success answers from the answering service."""


class HistoryWriteFailure(DocqaError):
    """Raised when a history record could not be saved."""


class HistoryLoadFailure(DocqaError):
    """Raised when a user's history could not be fetched or parsed."""
