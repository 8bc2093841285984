"""Centralized FastAPI dependency type aliases.

Import these ``*Dep`` aliases in route modules instead of writing
``Annotated[T, Depends(get_xxx)]`` everywhere. Each alias can be
overridden in tests via ``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

from fastapi import Depends

from docqa.configs.config import get_ingestion_config, get_session_config
from docqa.configs.system import IngestionConfig, SessionConfig
from docqa.core.extraction import TextExtractor
from docqa.infra.background import BestEffortTasks
from docqa.infra.services import (
    AnsweringClient,
    HistoryClient,
    get_answering_client,
    get_background_tasks,
    get_history_client,
)


def get_text_extractor() -> TextExtractor:
    return TextExtractor()


IngestionConfigDep = Annotated[IngestionConfig, Depends(get_ingestion_config)]
SessionConfigDep = Annotated[SessionConfig, Depends(get_session_config)]
TextExtractorDep = Annotated[TextExtractor, Depends(get_text_extractor)]
AnsweringClientDep = Annotated[AnsweringClient, Depends(get_answering_client)]
HistoryClientDep = Annotated[HistoryClient, Depends(get_history_client)]
BackgroundTasksDep = Annotated[BestEffortTasks, Depends(get_background_tasks)]
