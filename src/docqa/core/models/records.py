"""History records as exchanged with the history service."""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .constants import HISTORY_ERROR, HISTORY_LOADING, HISTORY_READY, KIND_QA, KIND_SUMMARY

InteractionKind = Literal["summary", "qa"]
HistoryStatus = Literal["loading", "ready", "error"]


class InteractionRecord(BaseModel):
    """One persisted question/answer or document/summary exchange.

    Records are append-only, so the model is frozen. Wire keys follow
    the history service (``userId``, ``type``, ``createdAt``); the id
    is accepted as either ``id`` or ``_id``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(
        validation_alias=AliasChoices("id", "_id"),
        description="Opaque identifier assigned by the history service",
    )
    user_id: str = Field(alias="userId", description="Owner of the record")
    query: str = Field(description="What was asked, as shown to the user")
    response: str = Field(description="Answer or summary text")
    kind: InteractionKind = Field(alias="type", description="Record kind")
    created_at: datetime = Field(
        alias="createdAt", description="Producer-assigned timestamp"
    )


class HistoryWrite(BaseModel):
    """Outbound payload for saving one interaction."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    query: str
    response: str
    kind: InteractionKind = Field(alias="type")


class HistoryView(BaseModel):
    """Result of one history load, already partitioned by kind.

    ``status`` separates an in-flight load and a failed load from a
    successful load that simply has no records.
    """

    status: HistoryStatus = HISTORY_LOADING
    error: str | None = Field(default=None, description="Set when status is error")
    summaries: list[InteractionRecord] = Field(default_factory=list)
    qas: list[InteractionRecord] = Field(default_factory=list)

    @classmethod
    def loading(cls) -> "HistoryView":
        return cls(status=HISTORY_LOADING)

    @classmethod
    def failed(cls, message: str) -> "HistoryView":
        return cls(status=HISTORY_ERROR, error=message)

    @classmethod
    def from_records(cls, records: list[InteractionRecord]) -> "HistoryView":
        """Split *records* by kind, keeping the service's order in each list."""
        return cls(
            status=HISTORY_READY,
            summaries=[r for r in records if r.kind == KIND_SUMMARY],
            qas=[r for r in records if r.kind == KIND_QA],
        )

    def partition(self, kind: InteractionKind) -> list[InteractionRecord]:
        if kind == KIND_SUMMARY:
            return self.summaries
        if kind == KIND_QA:
            return self.qas
        raise ValueError(f"Unknown interaction kind: {kind!r}")
