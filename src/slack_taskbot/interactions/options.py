# src/slack_taskbot/interactions/options.py

"""
Options for the task picker in the reminder modal.

Slack asks for options every time the picker is opened or typed into, sending the whole
view state along. The list is derived from that snapshot on each call:

- no user picked yet        -> [Sentinel.NO_USER]
- user picked, no open task -> [Sentinel.NO_TASKS]
- user picked, open tasks   -> up to 50 real options, earliest due date first
- store failed or timed out -> [Sentinel.ERROR]

The result is never empty, so the picker is never left without an answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from ..core.state import AppState
from ..tasks.task_api import list_open_tasks
from ..tasks.task_store import OPEN_TASKS_LIMIT
from .form_state import find_selected_user

logger = logging.getLogger(__name__)

# Slack rejects option text longer than 75 characters, suffix included.
LABEL_LIMIT = 75
ELLIPSIS = "..."


class Sentinel(StrEnum):
    """Placeholder option values. Non-numeric, so they never collide with task ids."""

    NO_USER = "no_user"
    NO_TASKS = "no_tasks"
    ERROR = "err"

    @property
    def label(self) -> str:
        return _SENTINEL_LABELS[self]

    @classmethod
    def parse(cls, raw: str | None) -> Sentinel | None:
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


_SENTINEL_LABELS = {
    Sentinel.NO_USER: "Please select a user first",
    Sentinel.NO_TASKS: "No tasks found for that user",
    Sentinel.ERROR: "Error loading tasks",
}


@dataclass(slots=True, frozen=True)
class Option:
    label: str
    value: str

    @classmethod
    def placeholder(cls, sentinel: Sentinel) -> Option:
        return cls(label=sentinel.label, value=sentinel.value)

    def to_slack(self) -> dict[str, Any]:
        return {"text": {"type": "plain_text", "text": self.label}, "value": self.value}


def truncate_task_text(text: str, budget: int) -> str:
    """Fit text into budget characters, marking a cut with ELLIPSIS."""
    if len(text) <= budget:
        return text
    return text[: max(0, budget - len(ELLIPSIS))] + ELLIPSIS


def format_task_label(text: str, due: date | str) -> str:
    due_s = due.isoformat() if isinstance(due, date) else str(due)
    suffix = f" — due {due_s}"
    return truncate_task_text(text, LABEL_LIMIT - len(suffix)) + suffix


def parse_task_choice(raw: str | None) -> int | Sentinel | None:
    """
    Turn an echoed option value back into what it stands for.

    Returns a task id, a Sentinel, or None for anything else (missing, garbage, <= 0).
    """
    sentinel = Sentinel.parse(raw)
    if sentinel is not None:
        return sentinel
    if raw is None or not (raw.isascii() and raw.isdigit()):
        return None
    task_id = int(raw)
    return task_id if task_id > 0 else None


async def build_task_options(state: AppState, snapshot: Any) -> list[Option]:
    owner = find_selected_user(snapshot)
    if owner is None:
        return [Option.placeholder(Sentinel.NO_USER)]

    try:
        tasks = await list_open_tasks(state, owner, OPEN_TASKS_LIMIT)
    except Exception:
        logger.exception("Loading task options failed owner=%s", owner)
        return [Option.placeholder(Sentinel.ERROR)]

    if not tasks:
        return [Option.placeholder(Sentinel.NO_TASKS)]

    return [
        Option(label=format_task_label(t.text, t.due_date), value=str(t.id))
        for t in tasks[:OPEN_TASKS_LIMIT]
    ]
