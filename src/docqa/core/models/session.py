"""Transient Q&A session state and its presentation."""

from typing import Literal

from pydantic import BaseModel, Field

from .constants import STATUS_IDLE

SessionStatus = Literal["idle", "submitting", "answered", "failed"]


class InteractionSession(BaseModel):
    """One question/answer cycle. Never persisted."""

    question: str = ""
    context: str = ""
    status: SessionStatus = STATUS_IDLE
    answer_text: str = Field(default="", description="Trimmed answer once answered")
    expanded: bool = Field(default=False, description="Enlarged answer view")


class AnswerView(BaseModel):
    """What the answer panel shows, in normal or expanded mode."""

    status: SessionStatus
    expanded: bool
    text: str = Field(description="Displayed answer value; empty when there is none")
    placeholder: str = Field(description="Hint shown while text is empty")

    @property
    def body(self) -> str:
        return self.text or self.placeholder
