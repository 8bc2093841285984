"""DocumentIngestionController -- one current context from file or paste.

Drag-and-drop and the file picker both end in ``ingest_file``; typing or
pasting ends in ``ingest_paste``. Each surface keeps its own value so
the user can switch back and forth without losing work, and the context
handed to a question is always the active surface's value, computed by
``normalize_input(current_input())``.
"""

import logging

from .errors import ExtractionFailed, UnsupportedArtifact
from .extraction import TextExtractor
from .models import (
    MODE_FILE,
    MODE_PASTE,
    VALID_MODES,
    Artifact,
    FileInput,
    PastedInput,
    normalize_input,
)

logger = logging.getLogger(__name__)


class DocumentIngestionController:
    """Owns the extracted context for the current editing session."""

    def __init__(self, extractor: TextExtractor | None = None) -> None:
        self._extractor = extractor or TextExtractor()
        self._file = FileInput()
        self._pasted = PastedInput()
        self._mode = MODE_FILE

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def selected_artifact_name(self) -> str:
        return self._file.artifact_name

    @property
    def pasted_text(self) -> str:
        return self._pasted.text

    def current_input(self) -> FileInput | PastedInput:
        """The input variant of the active surface."""
        return self._file if self._mode == MODE_FILE else self._pasted

    @property
    def context(self) -> str:
        return normalize_input(self.current_input())

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def ingest_file(self, artifact: Artifact) -> str:
        """Replace the file context with the text of *artifact*.

        On failure the selected name is cleared, the previous context is
        kept and the exception propagates so the caller can report it.
        """
        try:
            text = await self._extractor.extract(artifact)
        except (ExtractionFailed, UnsupportedArtifact):
            logger.warning("Could not ingest %s", artifact.name, exc_info=True)
            self._file = FileInput(text=self._file.text)
            raise

        self._file = FileInput(artifact_name=artifact.name, text=text)
        self._mode = MODE_FILE
        return text

    def ingest_paste(self, text: str) -> str:
        """Use *text* as the context as typed, bypassing extraction."""
        self._pasted = PastedInput(text=text)
        self._mode = MODE_PASTE
        return text

    def select_mode(self, mode: str) -> None:
        """Switch the visible surface without clearing either value."""
        if mode not in VALID_MODES:
            raise ValueError(f"Unknown input mode: {mode!r}")
        self._mode = mode

    def clear(self) -> None:
        """Drop the selected artifact and all held context."""
        self._file = FileInput()
        self._pasted = PastedInput()
