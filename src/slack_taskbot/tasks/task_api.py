# src/slack_taskbot/tasks/task_api.py

"""
Awaitable access to the task store.

The store is synchronous SQLite; every call runs in a worker thread and is bounded
by state.store_timeout so a slow disk never holds an interaction past Slack's window.
A timeout surfaces as TimeoutError and is handled like any other backend failure.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Callable, TypeVar

from ..core.state import AppState
from .task_store import OPEN_TASKS_LIMIT

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _call_store(state: AppState, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(fn, *args, **kwargs),
            timeout=state.store_timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("Store call %s timed out after %.2fs", getattr(fn, "__name__", fn), state.store_timeout)
        raise TimeoutError(f"task store did not answer within {state.store_timeout:.2f}s") from None


async def create_task(
    state: AppState,
    *,
    owner: str,
    text: str,
    due_date: str | date,
    creator: str | None = None,
    origin_channel: str | None = None,
) -> int:
    return await _call_store(
        state,
        state.task_store.add_task,
        owner=owner,
        text=text,
        due_date=due_date,
        creator=creator,
        origin_channel=origin_channel,
    )


async def fetch_task(state: AppState, task_id: int):
    return await _call_store(state, state.task_store.get_task, task_id)


async def list_open_tasks(state: AppState, owner: str, limit: int = OPEN_TASKS_LIMIT) -> list:
    return await _call_store(state, state.task_store.list_open_tasks_for_user, owner, limit)
