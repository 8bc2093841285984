"""Main CLI loop for interactive document Q&A."""

import logging
import sys
from typing import TextIO

import httpx

from docqa.configs.config import AppConfig
from docqa.core.errors import ExtractionFailed, UnsupportedArtifact
from docqa.core.history import HistoryAggregator
from docqa.core.ingestion import DocumentIngestionController
from docqa.core.models import (
    KIND_QA,
    KIND_SUMMARY,
    MODE_FILE,
    PROCESSING_PLACEHOLDER,
    VALID_KINDS,
    VALID_MODES,
    Artifact,
)
from docqa.core.qa import QAInteractionController
from docqa.infra.services import AnsweringClient, HistoryClient, build_http_client

from .formatter import ResponseFormatter

logger = logging.getLogger(__name__)

PASTE_TERMINATOR = "."
EXIT_COMMANDS = ("exit", "quit", "q", ":quit", ":q")

HELP_TEXT = """Commands:
  :file PATH            load a PDF or .txt file (replaces the current file)
  :paste                paste text; finish with a line containing only '.'
  :mode file|paste      switch the active input surface
  :clear                drop the loaded file and pasted text
  :ask QUESTION         ask a question (a bare line works too)
  :expand               toggle the expanded answer view
  :history [summary|qa] load your history and show one partition
  :help                 show this help
  :quit                 exit
"""


class DocqaCLI:
    """Interactive terminal front end for the Q&A pipeline."""

    def __init__(
        self,
        config: AppConfig,
        user_id: str | None,
        http: httpx.AsyncClient | None = None,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
    ):
        """Initialize the CLI.

        Parameters
        ----------
        config
            Application configuration (service endpoints).
        user_id
            Already-resolved user id; ``None`` disables history.
        http
            Shared HTTP client; one is built from ``config`` when omitted.
        input_stream
            Input stream for user input (default: stdin).
        output_stream
            Output stream for responses (default: stdout).
        """
        self.config = config
        self.user_id = user_id
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.http = http or build_http_client(config.services)
        self.formatter = ResponseFormatter(output_stream)

        self.ingestion = DocumentIngestionController()
        self.qa = QAInteractionController(
            AnsweringClient.from_config(config.services, self.http),
            HistoryClient.from_config(config.services, self.http),
        )
        self.history = HistoryAggregator(
            HistoryClient.from_config(config.services, self.http)
        )
        self.history_kind = KIND_SUMMARY

    async def run(self) -> None:
        """Run the interactive CLI loop."""
        try:
            self._print_welcome()
            while True:
                try:
                    line = self._get_user_input()
                    if not line.strip():
                        continue
                    if line.strip().lower() in EXIT_COMMANDS:
                        self._print("Goodbye!\n")
                        break
                    await self.handle_line(line)
                except KeyboardInterrupt:
                    self._print("\n\nInterrupted. Use ':quit' to exit.\n")
                except EOFError:
                    self._print("\nGoodbye!\n")
                    break
        finally:
            await self.qa.wait_for_background()
            await self.http.aclose()

    async def handle_line(self, line: str) -> None:
        """Dispatch one input line."""
        if not line.startswith(":"):
            await self.ask(line.strip())
            return

        command, _, arg = line[1:].partition(" ")
        command = command.lower()
        arg = arg.strip()

        if command == "file":
            await self.load_file(arg)
        elif command == "paste":
            self.paste(self._read_paste())
        elif command == "mode":
            self.select_mode(arg)
        elif command == "clear":
            self.ingestion.clear()
            self._print("Cleared.\n")
        elif command == "ask":
            await self.ask(arg)
        elif command == "expand":
            self.qa.toggle_expanded()
            self.formatter.show_answer(self.qa.view())
        elif command == "history":
            await self.show_history(arg)
        elif command == "help":
            self._print(HELP_TEXT)
        else:
            self._print(f"Unknown command ':{command}'. Type :help.\n")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def load_file(self, path: str) -> None:
        if not path:
            self._print("Usage: :file PATH\n")
            return
        try:
            artifact = Artifact.from_path(path)
        except OSError as e:
            self._print(f"❌ Cannot read {path}: {e}\n")
            return
        try:
            text = await self.ingestion.ingest_file(artifact)
        except UnsupportedArtifact as e:
            self._print(f"❌ {e}. Supports PDF and TXT files.\n")
            return
        except ExtractionFailed:
            self._print("❌ Error reading file\n")
            return
        self._print(f"📄 {artifact.name} loaded ({len(text)} characters)\n")

    def paste(self, text: str) -> None:
        self.ingestion.ingest_paste(text)
        self._print(f"📋 Pasted text set as context ({len(text)} characters)\n")

    def select_mode(self, mode: str) -> None:
        if mode not in VALID_MODES:
            self._print("Usage: :mode file|paste\n")
            return
        self.ingestion.select_mode(mode)
        self._print(f"Active input: {mode} ({len(self.ingestion.context)} characters)\n")

    async def ask(self, question: str) -> None:
        context = self.ingestion.context
        if not self.qa.can_submit(question, context):
            if not context:
                surface = "file" if self.ingestion.mode == MODE_FILE else "pasted text"
                self._print(f"Add a document first (active input: {surface}).\n")
            elif not question:
                self._print("Enter a question.\n")
            return

        self._print(f"{PROCESSING_PLACEHOLDER}\n")
        await self.qa.submit(question, context, self.user_id)
        self.formatter.show_answer(self.qa.view())

    async def show_history(self, kind: str) -> None:
        if kind:
            if kind not in VALID_KINDS:
                self._print(f"Usage: :history [{KIND_SUMMARY}|{KIND_QA}]\n")
                return
            self.history_kind = kind
        view = await self.history.load(self.user_id)
        self.formatter.show_history(view, self.history_kind)

    # ------------------------------------------------------------------
    # I/O
    # ------------------------------------------------------------------

    def _read_paste(self) -> str:
        self._print(f"Paste your text, then a line with only '{PASTE_TERMINATOR}':\n")
        lines: list[str] = []
        while True:
            line = self.input_stream.readline()
            if not line or line.rstrip("\n\r") == PASTE_TERMINATOR:
                break
            lines.append(line.rstrip("\n\r"))
        return "\n".join(lines)

    def _get_user_input(self) -> str:
        self._print("> ")
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        self._print("docqa - Document Q&A\n")
        self._print(f"Answering service: {self.config.services.answering_endpoint}\n")
        if not self.user_id:
            self._print("No user session found; history is unavailable.\n")
        self._print("Type :help for commands.\n\n")

    def _print(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()
