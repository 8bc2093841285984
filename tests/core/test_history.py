"""Tests for HistoryAggregator."""

import pytest

from docqa.core.errors import HistoryLoadFailure
from docqa.core.history import HistoryAggregator
from docqa.core.models import (
    HISTORY_ERROR,
    HISTORY_ERROR_FETCH,
    HISTORY_ERROR_NO_USER,
    HISTORY_LOADING,
    HISTORY_READY,
    KIND_QA,
    KIND_SUMMARY,
    InteractionRecord,
)


def _records(record_payload, *kinds):
    return [InteractionRecord.model_validate(record_payload(k, n)) for n, k in enumerate(kinds)]


class TestHistoryAggregator:
    def test_initially_loading(self, history):
        assert HistoryAggregator(history).view.status == HISTORY_LOADING

    @pytest.mark.asyncio
    async def test_partitions_in_fetch_order(self, history, record_payload):
        history.fetch.return_value = _records(
            record_payload, KIND_SUMMARY, KIND_QA, KIND_SUMMARY
        )
        aggregator = HistoryAggregator(history)

        view = await aggregator.load("u1")

        history.fetch.assert_awaited_once_with("u1")
        assert view.status == HISTORY_READY
        assert [r.id for r in aggregator.partition(KIND_SUMMARY)] == ["rec0", "rec2"]
        assert [r.id for r in aggregator.partition(KIND_QA)] == ["rec1"]

    @pytest.mark.asyncio
    async def test_empty_history_is_ready(self, history):
        view = await HistoryAggregator(history).load("u1")
        assert view.status == HISTORY_READY
        assert view.summaries == [] and view.qas == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [None, ""])
    async def test_no_user(self, history, user_id):
        view = await HistoryAggregator(history).load(user_id)
        assert view.status == HISTORY_ERROR
        assert view.error == HISTORY_ERROR_NO_USER
        assert view.summaries == [] and view.qas == []
        history.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_failure_empties_both(self, history, record_payload):
        aggregator = HistoryAggregator(history)
        history.fetch.return_value = _records(record_payload, KIND_QA)
        await aggregator.load("u1")

        history.fetch.side_effect = HistoryLoadFailure("HTTP 500")
        view = await aggregator.load("u1")

        assert view.status == HISTORY_ERROR
        assert view.error == HISTORY_ERROR_FETCH
        assert aggregator.partition(KIND_QA) == []
        assert aggregator.partition(KIND_SUMMARY) == []
