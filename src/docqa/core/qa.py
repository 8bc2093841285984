"""QAInteractionController -- lifecycle of one question against a context.

States::

    idle ──submit──▶ submitting ──ok──▶ answered
                         │
                         └──error──▶ failed

``submit`` is a no-op (returns ``False``) when the question or context
is empty or another submission is still in flight, so one user action
never produces two answer calls or two history writes.

After an answer arrives the session is ``answered`` first, then a
history record is written as a detached best-effort task: its failure
is logged and never changes what the user sees.
"""

import logging

from docqa.infra.background import BestEffortTasks
from docqa.infra.services import AnsweringClient, HistoryClient
from docqa.infra.telemetry import (
    ATTR_HISTORY_KIND,
    ATTR_QA_ANSWER_LEN,
    ATTR_QA_CONTEXT_LEN,
    ATTR_QA_QUESTION_LEN,
    SPAN_HISTORY_WRITE,
    SPAN_QA_ANSWER,
    tracer,
)

from .errors import AnsweringServiceFailure, MissingPrecondition
from .models import (
    EMPTY_ANSWER_HINT,
    EXPANDED_PENDING_HINT,
    KIND_QA,
    PROCESSING_PLACEHOLDER,
    STATUS_ANSWERED,
    STATUS_FAILED,
    STATUS_SUBMITTING,
    AnswerView,
    HistoryWrite,
    InteractionSession,
)

logger = logging.getLogger(__name__)

HISTORY_WRITE_TASK_NAME = "history-write"


def format_qa_query(question: str, context: str) -> str:
    """The ``query`` stored for a Q&A record: question plus full context."""
    return f"Q: {question}\n\nContext:\n{context}"


class QAInteractionController:
    """Drives one question/answer session at a time."""

    def __init__(
        self,
        answering: AnsweringClient,
        history: HistoryClient,
        background: BestEffortTasks | None = None,
    ) -> None:
        self._answering = answering
        self._history = history
        self._background = background or BestEffortTasks()
        self._session = InteractionSession()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def session(self) -> InteractionSession:
        """A snapshot of the current session."""
        return self._session.model_copy()

    @property
    def status(self) -> str:
        return self._session.status

    @property
    def answer_text(self) -> str:
        return self._session.answer_text

    @property
    def expanded(self) -> bool:
        return self._session.expanded

    @property
    def in_flight(self) -> bool:
        return self._session.status == STATUS_SUBMITTING

    @property
    def displayed_answer(self) -> str:
        """Placeholder while submitting, the answer once answered, else empty."""
        if self._session.status == STATUS_SUBMITTING:
            return PROCESSING_PLACEHOLDER
        if self._session.status == STATUS_ANSWERED:
            return self._session.answer_text
        return ""

    def can_submit(self, question: str, context: str) -> bool:
        """Whether the submit action is enabled."""
        return bool(question) and bool(context) and not self.in_flight

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self, question: str, context: str, user_id: str | None) -> bool:
        """Ask *question* against *context*.

        Returns ``True`` when an answer was obtained. ``user_id`` is only
        needed for the history record; without it the answer is still
        shown and the write is skipped.
        """
        if not self.can_submit(question, context):
            logger.debug(
                "Submit ignored (question=%s, context=%s, in_flight=%s)",
                bool(question),
                bool(context),
                self.in_flight,
            )
            return False

        self._session = InteractionSession(
            question=question,
            context=context,
            status=STATUS_SUBMITTING,
            expanded=self._session.expanded,
        )

        try:
            raw_answer = await self._ask(question, context)
        except AnsweringServiceFailure as exc:
            logger.warning("Answering service failed: %s", exc, exc_info=True)
            self._session.answer_text = ""
            self._session.status = STATUS_FAILED
            return False
        except BaseException:
            self._session.status = STATUS_FAILED
            raise

        self._session.answer_text = raw_answer.strip()
        self._session.status = STATUS_ANSWERED
        self._record_history(user_id, self._session)
        return True

    async def _ask(self, question: str, context: str) -> str:
        with tracer.start_as_current_span(SPAN_QA_ANSWER) as span:
            span.set_attribute(ATTR_QA_QUESTION_LEN, len(question))
            span.set_attribute(ATTR_QA_CONTEXT_LEN, len(context))
            answer = await self._answering.ask(question, context)
            span.set_attribute(ATTR_QA_ANSWER_LEN, len(answer))
            return answer

    # ------------------------------------------------------------------
    # History (best effort)
    # ------------------------------------------------------------------

    def _record_history(self, user_id: str | None, session: InteractionSession) -> None:
        if not user_id:
            logger.warning(
                "Skipping history write: %s",
                MissingPrecondition("no user id for the answered session"),
            )
            return
        record = HistoryWrite(
            user_id=user_id,
            query=format_qa_query(session.question, session.context),
            response=session.answer_text,
            kind=KIND_QA,
        )
        self._background.spawn(self._save(record), name=HISTORY_WRITE_TASK_NAME)

    async def _save(self, record: HistoryWrite) -> None:
        with tracer.start_as_current_span(SPAN_HISTORY_WRITE) as span:
            span.set_attribute(ATTR_HISTORY_KIND, record.kind)
            await self._history.save(record)

    async def wait_for_background(self) -> None:
        """Wait for outstanding history writes (shutdown and tests)."""
        await self._background.drain()

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def toggle_expanded(self) -> bool:
        self._session.expanded = not self._session.expanded
        return self._session.expanded

    def set_expanded(self, expanded: bool) -> None:
        self._session.expanded = expanded

    def view(self) -> AnswerView:
        """The answer panel, mirroring the current displayed answer."""
        expanded = self._session.expanded
        return AnswerView(
            status=self._session.status,
            expanded=expanded,
            text=self.displayed_answer,
            placeholder=EXPANDED_PENDING_HINT if expanded else EMPTY_ANSWER_HINT,
        )
