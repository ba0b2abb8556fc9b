# src/slack_taskbot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the Slack transport and the storage swappable and makes testing easier.
"""

from datetime import date
from typing import Any, Awaitable, Protocol

SlackView = dict[str, Any]


class Messenger(Protocol):
    """
    Connector-side port: how interaction handlers talk back to the chat platform.

    - open_view: open a modal for a trigger id
    - send_text: regular message to a channel or a user id (a user id means a DM)
    - send_ephemeral: message visible only to user_id in channel
    """

    def open_view(self, *, trigger_id: str, view: SlackView) -> Awaitable[None]: ...

    def send_text(self, *, channel: str, text: str) -> Awaitable[None]: ...

    def send_ephemeral(self, *, channel: str, user_id: str, text: str) -> Awaitable[None]: ...


class TaskRepo(Protocol):
    def add_task(
            self,
            *,
            owner: str,
            text: str,
            due_date: str | date,
            creator: str | None = None,
            origin_channel: str | None = None,
    ) -> int: ...

    def get_task(self, task_id: int) -> Any | None: ...

    def list_open_tasks_for_user(self, user_id: str, limit: int = 50) -> list[Any]: ...
