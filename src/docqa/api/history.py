"""History endpoints."""

from fastapi import APIRouter

from docqa.core.errors import HistoryLoadFailure
from docqa.core.history import HistoryAggregator
from docqa.core.models import HISTORY_ERROR, HISTORY_ERROR_FETCH
from docqa.infra.identity import resolve_user_id
from docqa.infra.services import HistoryClient

from .deps import HistoryClientDep, SessionConfigDep
from .models import HistoryResponse

router = APIRouter(prefix="/api/v1", tags=["history"])


async def _load(user_id: str, history: HistoryClient) -> HistoryResponse:
    view = await HistoryAggregator(history).load(user_id)
    if view.status == HISTORY_ERROR:
        raise HistoryLoadFailure(view.error or HISTORY_ERROR_FETCH)
    return HistoryResponse(summaries=view.summaries, qas=view.qas)


@router.get("/history", response_model=HistoryResponse)
async def get_session_history(
    history: HistoryClientDep, session_config: SessionConfigDep
) -> HistoryResponse:
    """History of the configured session user; 400 when there is none."""
    return await _load(resolve_user_id(session_config), history)


@router.get("/history/{user_id}", response_model=HistoryResponse)
async def get_history(user_id: str, history: HistoryClientDep) -> HistoryResponse:
    """Return the user's summaries and Q&A records, each in service order."""
    return await _load(user_id, history)
