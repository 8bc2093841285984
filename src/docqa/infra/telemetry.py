"""OpenTelemetry bootstrap: tracing initialisation and helpers.

Configures a ``TracerProvider`` with an OTLP HTTP exporter when tracing
is enabled via ``TracingConfig``. When disabled the module is a no-op
and ``tracer`` hands out non-recording spans.

Usage::

    from docqa.infra.telemetry import SPAN_QA_ANSWER, tracer

    with tracer.start_as_current_span(SPAN_QA_ANSWER) as span:
        ...
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, FastAPI
from opentelemetry import trace

from docqa.configs.config import AppConfig, get_app_config
from docqa.configs.system import TracingConfig
from docqa.infra.lifespan import get_app

logger = logging.getLogger(__name__)

tracer = trace.get_tracer("docqa")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_EXTRACT = "ingestion.extract"
SPAN_QA_ANSWER = "qa.answer"
SPAN_HISTORY_WRITE = "history.write"
SPAN_HISTORY_LOAD = "history.load"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_ARTIFACT_MEDIA_TYPE = "ingestion.media_type"
ATTR_ARTIFACT_SIZE = "ingestion.size"
ATTR_EXTRACTED_LEN = "ingestion.extracted_len"

ATTR_QA_QUESTION_LEN = "qa.question_len"
ATTR_QA_CONTEXT_LEN = "qa.context_len"
ATTR_QA_ANSWER_LEN = "qa.answer_len"

ATTR_HISTORY_KIND = "history.kind"
ATTR_HISTORY_RECORD_COUNT = "history.record_count"


def init_telemetry(
    app: object | None = None,
    settings: TracingConfig | None = None,
) -> None:
    """Initialise the OTEL ``TracerProvider`` and auto-instrumentations.

    Parameters
    ----------
    app:
        The FastAPI application instance, instrumented for inbound spans
        when given.
    settings:
        Tracing configuration. When ``None`` or ``enabled`` is ``False``,
        this function is a no-op.
    """
    if settings is None or not settings.enabled:
        logger.info("OpenTelemetry tracing disabled.")
        return

    if not settings.endpoint:
        logger.warning(
            "Tracing enabled but no endpoint configured, "
            "skipping OpenTelemetry setup."
        )
        return

    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

    resource = Resource.create({"service.name": settings.service_name})
    sampler = ParentBased(root=TraceIdRatioBased(settings.sample_rate))
    provider = TracerProvider(resource=resource, sampler=sampler)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint))
    )
    trace.set_tracer_provider(provider)

    if app is not None:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        excluded = ",".join(settings.excluded_urls) if settings.excluded_urls else ""
        FastAPIInstrumentor.instrument_app(app, excluded_urls=excluded)

    from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

    HTTPXClientInstrumentor().instrument()

    logger.info(
        "OpenTelemetry tracing initialised (service=%s).", settings.service_name
    )


# ---------------------------------------------------------------------------
# Lifespan dependency
# ---------------------------------------------------------------------------


async def build_telemetry(
    app: Annotated[FastAPI, Depends(get_app)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> AsyncGenerator[None, None]:
    """Initialise OTEL tracing for the app and outbound httpx calls."""
    init_telemetry(app, config.tracing)
    yield
