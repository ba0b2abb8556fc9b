# src/slack_taskbot/interactions/validation.py

"""Checks run on submitted modals before anything is written or sent."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, cast

from . import views
from .form_state import field_value
from .options import Sentinel, parse_task_choice

# Lexical check only: "2024-13-40" passes here. Whether the date exists on the calendar
# is decided by the store, which refuses to persist a date it cannot parse.
DUE_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


class SubmissionInvalid(ValueError):
    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.missing = missing


@dataclass(slots=True, frozen=True)
class NewTaskSubmission:
    text: str
    due_date: str


@dataclass(slots=True, frozen=True)
class ReminderSubmission:
    target_user: str
    task_id: int
    message: str


def validate_new_task(snapshot: Any) -> NewTaskSubmission:
    text = (field_value(snapshot, views.TASK_BLOCK, views.TASK_INPUT).value or "").strip()
    # The date is matched as typed; surrounding whitespace fails the pattern.
    due = field_value(snapshot, views.DATE_BLOCK, views.DATE_INPUT).value or ""

    missing: list[str] = []
    if not text:
        missing.append("task")
    if not DUE_DATE_PATTERN.fullmatch(due):
        missing.append("due date")

    if missing:
        raise SubmissionInvalid(
            "Task not saved. Ensure you provided a task and date in YYYY-MM-DD format.",
            tuple(missing),
        )
    return NewTaskSubmission(text=text, due_date=due)


def validate_reminder(snapshot: Any) -> ReminderSubmission:
    user = field_value(snapshot, views.USER_SELECT_BLOCK, views.USER_SELECT).value
    choice = parse_task_choice(field_value(snapshot, views.TASK_SELECT_BLOCK, views.TASK_SELECT).value)
    message = (field_value(snapshot, views.MESSAGE_BLOCK, views.CUSTOM_MESSAGE).value or "").strip()

    missing: list[str] = []
    if not user:
        missing.append("user")
    # A placeholder option (no_user / no_tasks / err) is not a task.
    if choice is None or isinstance(choice, Sentinel):
        missing.append("task")

    if missing:
        if len(missing) == 2:
            text = "Please select both a user and a task."
        else:
            text = f"Please select a {missing[0]}."
        raise SubmissionInvalid(text, tuple(missing))

    return ReminderSubmission(target_user=cast(str, user), task_id=cast(int, choice), message=message)
