# src/slack_taskbot/interactions/handlers.py

"""
Interaction handlers.

Bolt listeners at the bottom acknowledge first and then delegate to the coroutines
above them, which only see the Messenger port and AppState:

  /addtask             -> open_add_task_form
  add_task_view        -> handle_add_task_submission
  /reminduser          -> open_reminder_form
  task_select options  -> provide_task_options (the option list is the ack)
  send_reminder_view   -> handle_reminder_submission

Work that fails after the ack is reported to the invoker with an ephemeral message.
"""

from __future__ import annotations

import logging
from typing import Any

from ..connectors.slack_messenger import SlackMessenger
from ..core.ports import Messenger
from ..core.state import AppState
from ..tasks.task_api import create_task, fetch_task
from . import views
from .form_state import snapshot_from_body
from .options import build_task_options
from .validation import SubmissionInvalid, validate_new_task, validate_reminder

logger = logging.getLogger(__name__)

ADD_TASK_COMMAND = "/addtask"
REMIND_COMMAND = "/reminduser"


def _user_id(body: dict[str, Any]) -> str:
    user = body.get("user")
    if isinstance(user, dict):
        return str(user.get("id") or "")
    # Slash command payloads carry a flat user_id.
    return str(body.get("user_id") or "")


async def _notify_private(messenger: Messenger, user_id: str, text: str) -> None:
    """Ephemeral notice in the invoker's DM. A failure here is logged and dropped."""
    try:
        await messenger.send_ephemeral(channel=user_id, user_id=user_id, text=text)
    except Exception:
        logger.exception("Ephemeral send failed user=%s", user_id)


# ---- /addtask ----


async def open_add_task_form(messenger: Messenger, body: dict[str, Any]) -> None:
    try:
        await messenger.open_view(
            trigger_id=str(body.get("trigger_id") or ""),
            view=views.add_task_view(channel_id=body.get("channel_id")),
        )
    except Exception:
        logger.exception("Opening %s modal failed", ADD_TASK_COMMAND)


async def handle_add_task_submission(
    state: AppState, messenger: Messenger, body: dict[str, Any], view: dict[str, Any]
) -> None:
    user = _user_id(body)
    snapshot = snapshot_from_body({"view": view})

    try:
        submission = validate_new_task(snapshot)
    except SubmissionInvalid as e:
        logger.debug("Task submission rejected user=%s missing=%s", user, e.missing)
        await _notify_private(messenger, user, e.message)
        return

    origin_channel = views.decode_metadata(view.get("private_metadata")).get("channel_id")

    try:
        task_id = await create_task(
            state,
            owner=user,
            text=submission.text,
            due_date=submission.due_date,
            creator=user,
            origin_channel=origin_channel,
        )
    except ValueError as e:
        logger.info("Task not stored user=%s: %s", user, e)
        await _notify_private(messenger, user, f"Task not saved. {e}.")
        return
    except Exception:
        logger.exception("Task insert failed user=%s", user)
        await _notify_private(messenger, user, "Failed to save task (server error).")
        return

    logger.info("Task %s saved for user=%s due=%s", task_id, user, submission.due_date)

    try:
        await messenger.send_text(
            channel=user,
            text=f"✅ Your task was saved:\n*{submission.text}*\nDue: {submission.due_date}",
        )
    except Exception:
        logger.exception("Task confirmation DM failed task_id=%s user=%s", task_id, user)
        await _notify_private(messenger, user, "Task saved, but the confirmation message could not be sent.")


# ---- /reminduser ----


async def open_reminder_form(messenger: Messenger, body: dict[str, Any]) -> None:
    try:
        await messenger.open_view(
            trigger_id=str(body.get("trigger_id") or ""),
            view=views.reminder_view(),
        )
    except Exception:
        logger.exception("Opening %s modal failed", REMIND_COMMAND)


async def provide_task_options(state: AppState, body: dict[str, Any]) -> list[dict[str, Any]]:
    options = await build_task_options(state, snapshot_from_body(body))
    return [o.to_slack() for o in options]


def reminder_text(task: Any, message: str = "") -> str:
    text = f"🔔 *Reminder* about your task:\n*{task.text}*\nDue: {task.due_date.isoformat()}"
    if message:
        text += f"\n\n{message}"
    return text


async def handle_reminder_submission(
    state: AppState, messenger: Messenger, body: dict[str, Any], view: dict[str, Any]
) -> None:
    invoker = _user_id(body)
    snapshot = snapshot_from_body({"view": view})

    try:
        submission = validate_reminder(snapshot)
    except SubmissionInvalid as e:
        logger.debug("Reminder submission rejected user=%s missing=%s", invoker, e.missing)
        await _notify_private(messenger, invoker, e.message)
        return

    try:
        task = await fetch_task(state, submission.task_id)
        if task is None:
            logger.info("Reminder for missing task_id=%s requested by %s", submission.task_id, invoker)
            await _notify_private(messenger, invoker, "Task not found (may have been deleted).")
            return

        await messenger.send_text(
            channel=submission.target_user,
            text=reminder_text(task, submission.message),
        )
    except Exception:
        logger.exception("Sending reminder failed task_id=%s by=%s", submission.task_id, invoker)
        await _notify_private(messenger, invoker, "Failed to send reminder (server error).")
        return

    logger.info("Reminder sent task_id=%s to=%s by=%s", submission.task_id, submission.target_user, invoker)
    await _notify_private(
        messenger,
        invoker,
        f"Reminder sent to <@{submission.target_user}> for task id {submission.task_id}.",
    )


# ---- Bolt wiring ----


def register_handlers(app, state: AppState) -> None:
    """Attach listeners to a slack_bolt AsyncApp."""

    @app.command(ADD_TASK_COMMAND)
    async def _on_addtask(ack, body, client) -> None:
        await ack()
        await open_add_task_form(SlackMessenger(client), body)

    @app.view(views.ADD_TASK_CALLBACK)
    async def _on_add_task_submit(ack, body, view, client) -> None:
        await ack()
        await handle_add_task_submission(state, SlackMessenger(client), body, view)

    @app.command(REMIND_COMMAND)
    async def _on_reminduser(ack, body, client) -> None:
        await ack()
        await open_reminder_form(SlackMessenger(client), body)

    @app.options(views.TASK_SELECT)
    async def _on_task_options(ack, body) -> None:
        await ack(options=await provide_task_options(state, body))

    @app.view(views.REMINDER_CALLBACK)
    async def _on_reminder_submit(ack, body, view, client) -> None:
        await ack()
        await handle_reminder_submission(state, SlackMessenger(client), body, view)
