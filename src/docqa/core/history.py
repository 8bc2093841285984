"""HistoryAggregator -- load a user's records split by kind."""

import logging

from docqa.infra.services import HistoryClient
from docqa.infra.telemetry import ATTR_HISTORY_RECORD_COUNT, SPAN_HISTORY_LOAD, tracer

from .errors import HistoryLoadFailure
from .models import (
    HISTORY_ERROR_FETCH,
    HISTORY_ERROR_NO_USER,
    HistoryView,
    InteractionKind,
    InteractionRecord,
)

logger = logging.getLogger(__name__)


class HistoryAggregator:
    """Fetches all records of a user once and partitions them.

    A load is all-or-nothing: on any failure the view carries the error
    and both partitions stay empty until the next ``load``.
    """

    def __init__(self, history: HistoryClient) -> None:
        self._history = history
        self._view = HistoryView.loading()

    @property
    def view(self) -> HistoryView:
        return self._view

    def partition(self, kind: InteractionKind) -> list[InteractionRecord]:
        return self._view.partition(kind)

    async def load(self, user_id: str | None) -> HistoryView:
        self._view = HistoryView.loading()

        if not user_id:
            logger.warning("History load without a user id")
            self._view = HistoryView.failed(HISTORY_ERROR_NO_USER)
            return self._view

        with tracer.start_as_current_span(SPAN_HISTORY_LOAD) as span:
            try:
                records = await self._history.fetch(user_id)
            except HistoryLoadFailure as exc:
                logger.error("Error fetching history: %s", exc, exc_info=True)
                self._view = HistoryView.failed(HISTORY_ERROR_FETCH)
                return self._view
            span.set_attribute(ATTR_HISTORY_RECORD_COUNT, len(records))

        self._view = HistoryView.from_records(records)
        logger.debug(
            "Loaded %d summaries and %d Q&A records",
            len(self._view.summaries),
            len(self._view.qas),
        )
        return self._view
