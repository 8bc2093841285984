"""Question-answering endpoint."""

from fastapi import APIRouter

from docqa.core.errors import AnsweringServiceFailure, MissingPrecondition
from docqa.core.qa import QAInteractionController
from docqa.infra.identity import find_user_id

from .deps import (
    AnsweringClientDep,
    BackgroundTasksDep,
    HistoryClientDep,
    SessionConfigDep,
)
from .models import QARequest, QAResponse

router = APIRouter(prefix="/api/v1", tags=["qa"])


@router.post("/qa", response_model=QAResponse)
async def ask_question(
    qa_request: QARequest,
    answering: AnsweringClientDep,
    history: HistoryClientDep,
    background: BackgroundTasksDep,
    session_config: SessionConfigDep,
) -> QAResponse:
    """Answer a question against the supplied context.

    The history record is written in the background after the response
    is decided; its failure does not affect this response.
    """
    controller = QAInteractionController(answering, history, background)
    if not controller.can_submit(qa_request.question, qa_request.context):
        raise MissingPrecondition("Question and context are required")

    user_id = qa_request.user_id or find_user_id(session_config)
    answered = await controller.submit(
        qa_request.question, qa_request.context, user_id
    )
    if not answered:
        raise AnsweringServiceFailure("Failed to get answer")

    return QAResponse(status=controller.status, answer=controller.answer_text)
