"""Logging setup shared by the API server and the CLI.

The API logs to stdout and takes over uvicorn's loggers; the CLI logs to
stderr so answers on stdout stay clean. Output is either JSON lines
(``logging.json_output``) or uvicorn's coloured development format.
Every record carries ``trace_id``/``span_id`` of the active
OpenTelemetry span, empty outside a span.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from opentelemetry import trace

from docqa.configs.system import LoggingConfig

_DEV_FORMAT = "%(levelprefix)s %(asctime)s %(name)s  %(message)s"
_DEV_DATEFMT = "%H:%M:%S"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
_JSON_RENAMES = {"asctime": "timestamp", "levelname": "level", "name": "logger"}

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# Third-party loggers capped at WARNING.
_QUIET_LOGGERS = ("httpx", "httpcore", "opentelemetry", "python_multipart")


class TraceContextFilter(logging.Filter):
    """Stamps the current span's ids onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = trace.get_current_span().get_span_context()
        valid = ctx is not None and ctx.is_valid
        record.trace_id = format(ctx.trace_id, "032x") if valid else ""  # type: ignore[attr-defined]
        record.span_id = format(ctx.span_id, "016x") if valid else ""  # type: ignore[attr-defined]
        return True


def build_formatter(config: LoggingConfig, stream: TextIO) -> logging.Formatter:
    if config.json_output:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(
            fmt=_JSON_FORMAT,
            rename_fields=_JSON_RENAMES,
            defaults={"trace_id": "", "span_id": ""},
        )

    from uvicorn.logging import DefaultFormatter

    isatty = getattr(stream, "isatty", None)
    return DefaultFormatter(
        fmt=_DEV_FORMAT,
        datefmt=_DEV_DATEFMT,
        use_colors=bool(isatty and isatty()),
    )


def setup_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
    *,
    capture_uvicorn: bool = True,
) -> logging.Handler:
    """Install one handler on the root logger and return it.

    Call once per process. ``capture_uvicorn`` routes uvicorn's own
    loggers through the same handler instead of their defaults.
    """
    config = config or LoggingConfig()
    stream = stream or sys.stdout

    handler = logging.StreamHandler(stream)
    handler.addFilter(TraceContextFilter())
    handler.setFormatter(build_formatter(config, stream))

    root = logging.getLogger()
    root.setLevel(config.level.upper())
    root.handlers = [handler]

    if capture_uvicorn:
        for name in _UVICORN_LOGGERS:
            uvicorn_logger = logging.getLogger(name)
            uvicorn_logger.handlers = [handler]
            uvicorn_logger.propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler
