"""Resolve the already-authenticated user id.

The login flow is external; it leaves the id either in configuration
or in a JSON session file shaped like ``{"userId": "..."}``. Callers
resolve it once and pass it explicitly to the controllers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from docqa.configs.system import SessionConfig
from docqa.core.errors import MissingPrecondition

logger = logging.getLogger(__name__)

_USER_ID_KEY = "userId"


def read_session_file(path: str | Path) -> str | None:
    """Return the ``userId`` stored in *path*, or ``None`` if unavailable."""
    path = Path(path)
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Unreadable session file %s", path, exc_info=True)
        return None
    if not isinstance(data, dict):
        return None
    user_id = data.get(_USER_ID_KEY)
    if user_id is None:
        return None
    return str(user_id) or None


def find_user_id(config: SessionConfig) -> str | None:
    """Explicit ``user_id`` wins; otherwise read the session file."""
    if config.user_id:
        return config.user_id
    if config.session_file:
        return read_session_file(config.session_file)
    return None


def resolve_user_id(config: SessionConfig) -> str:
    """Like ``find_user_id`` but raise ``MissingPrecondition`` when absent."""
    user_id = find_user_id(config)
    if not user_id:
        raise MissingPrecondition("User not found")
    return user_id
