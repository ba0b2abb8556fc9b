# src/slack_taskbot/interactions/views.py

"""Modal definitions and the block/action ids the handlers read back."""

from __future__ import annotations

import json
from typing import Any

from ..core.ports import SlackView

ADD_TASK_CALLBACK = "add_task_view"
TASK_BLOCK, TASK_INPUT = "task_block", "task_input"
DATE_BLOCK, DATE_INPUT = "date_block", "date_input"

REMINDER_CALLBACK = "send_reminder_view"
USER_SELECT_BLOCK, USER_SELECT = "user_select_block", "user_select"
TASK_SELECT_BLOCK, TASK_SELECT = "task_select_block", "task_select"
MESSAGE_BLOCK, CUSTOM_MESSAGE = "custom_message_block", "custom_message"


def _plain(text: str) -> dict[str, Any]:
    return {"type": "plain_text", "text": text}


def _input_block(
    block_id: str,
    label: str,
    element: dict[str, Any],
    *,
    optional: bool = False,
) -> dict[str, Any]:
    block: dict[str, Any] = {
        "type": "input",
        "block_id": block_id,
        "label": _plain(label),
        "element": element,
    }
    if optional:
        block["optional"] = True
    return block


def encode_metadata(**fields: str | None) -> str:
    """private_metadata travels through Slack untouched (max 3000 chars)."""
    return json.dumps({k: v for k, v in fields.items() if v}, separators=(",", ":"))


def decode_metadata(raw: Any) -> dict[str, str]:
    if not isinstance(raw, str) or not raw:
        return {}
    try:
        val = json.loads(raw)
    except ValueError:
        return {}
    if not isinstance(val, dict):
        return {}
    return {str(k): str(v) for k, v in val.items() if isinstance(v, str)}


def add_task_view(*, channel_id: str | None = None) -> SlackView:
    return {
        "type": "modal",
        "callback_id": ADD_TASK_CALLBACK,
        "title": _plain("Add Task"),
        "submit": _plain("Save"),
        "close": _plain("Cancel"),
        "private_metadata": encode_metadata(channel_id=channel_id),
        "blocks": [
            _input_block(
                TASK_BLOCK,
                "Task",
                {"type": "plain_text_input", "action_id": TASK_INPUT, "multiline": True},
            ),
            _input_block(
                DATE_BLOCK,
                "Due date (YYYY-MM-DD)",
                {"type": "plain_text_input", "action_id": DATE_INPUT},
            ),
        ],
    }


def reminder_view() -> SlackView:
    return {
        "type": "modal",
        "callback_id": REMINDER_CALLBACK,
        "title": _plain("Send Reminder"),
        "submit": _plain("Send"),
        "close": _plain("Close"),
        "blocks": [
            _input_block(
                USER_SELECT_BLOCK,
                "Select user",
                {"type": "users_select", "action_id": USER_SELECT},
            ),
            _input_block(
                TASK_SELECT_BLOCK,
                "Select task",
                {
                    "type": "external_select",
                    "action_id": TASK_SELECT,
                    "placeholder": _plain("Search tasks (select a user first)"),
                    "min_query_length": 0,
                },
            ),
            _input_block(
                MESSAGE_BLOCK,
                "Optional message",
                {"type": "plain_text_input", "action_id": CUSTOM_MESSAGE, "multiline": True},
                optional=True,
            ),
        ],
    }
