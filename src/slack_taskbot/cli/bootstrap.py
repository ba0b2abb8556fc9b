# src/slack_taskbot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- validates settings once (missing secrets are fatal),
- opens the task store (creating the schema),
- wires both into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Raises ConfigError for missing/invalid settings and ValueError / sqlite3.Error when the
    store cannot be opened; the caller treats both as fatal.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.require()

    task_store = TaskStore.from_url(settings.database_url)

    return AppState(settings=settings, task_store=task_store)
