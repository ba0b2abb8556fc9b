# src/slack_taskbot/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(slots=True)
class Task:
    id: int
    owner: str
    text: str
    due_date: date

    creator: str | None
    origin_channel: str | None

    created_at: float
    completed: bool = False


@dataclass(slots=True, frozen=True)
class TaskSummary:
    """Columns needed to offer a task in a picker."""

    id: int
    text: str
    due_date: date
