"""Renders the answer panel and history partitions as plain text."""

from typing import TextIO

from docqa.core.models import (
    HISTORY_ERROR,
    HISTORY_LOADING,
    KIND_SUMMARY,
    AnswerView,
    HistoryView,
    InteractionKind,
    InteractionRecord,
)

_NORMAL_WIDTH = 60
_EXPANDED_WIDTH = 100

EMPTY_SUMMARIES = (
    "You haven't generated any summaries yet. "
    "Start exploring documents to see them here!"
)
EMPTY_QAS = "No questions asked yet. Use the Q&A tool and your history will appear here!"


class ResponseFormatter:
    """Writes controller state to a text stream."""

    def __init__(self, output: TextIO):
        self.output = output

    def show_answer(self, view: AnswerView) -> None:
        """Print the answer panel; the expanded view gets a wider frame."""
        width = _EXPANDED_WIDTH if view.expanded else _NORMAL_WIDTH
        title = " Answer (expanded) " if view.expanded else " Answer "
        self._print(f"\n{title.center(width, '─')}\n")
        self._print(f"{view.body}\n")
        self._print(f"{'─' * width}\n")

    def show_history(self, view: HistoryView, kind: InteractionKind) -> None:
        if view.status == HISTORY_LOADING:
            self._print("Loading...\n")
            return
        if view.status == HISTORY_ERROR:
            self._print(f"❌ {view.error}\n")
            return

        items = view.partition(kind)
        header = "Summaries" if kind == KIND_SUMMARY else "Q&A"
        self._print(f"\n🕘 Your History: {header} ({len(items)})\n\n")
        if not items:
            self._print(f"{EMPTY_SUMMARIES if kind == KIND_SUMMARY else EMPTY_QAS}\n")
            return
        for item in items:
            self._print_record(item)

    def _print_record(self, record: InteractionRecord) -> None:
        if record.kind == KIND_SUMMARY:
            query_label, response_label = "📝 Query:", "✅ Summary:"
        else:
            query_label, response_label = "❓ Question:", "💡 Answer:"
        self._print(f"🕒 {record.created_at.astimezone():%Y-%m-%d %H:%M:%S}\n")
        self._print(f"{query_label}\n{record.query}\n")
        self._print(f"{response_label}\n{record.response}\n\n")

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
