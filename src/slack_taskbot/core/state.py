# src/slack_taskbot/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskRepo


@dataclass(slots=True)
class AppState:
    """
    Everything an interaction handler needs, built once in the composition root.

    There is no per-interaction mutable state here: form state travels with each
    Slack request and tasks live in the store.
    """

    # Settings object (config.Settings in production, SimpleNamespace in tests).
    settings: object
    task_store: TaskRepo

    @property
    def store_timeout(self) -> float:
        return float(getattr(self.settings, "store_timeout_seconds", 2.5))
