# src/slack_taskbot/connectors/slack_messenger.py

from __future__ import annotations

import logging

from slack_sdk.web.async_client import AsyncWebClient

from ..core.ports import SlackView

logger = logging.getLogger(__name__)


def create_web_client(settings) -> AsyncWebClient:
    """
    Web API client shared by the Bolt app.

    The explicit timeout keeps a hung Slack call from stalling a handler; no retry
    handlers are attached, so every call is attempted once.
    """
    return AsyncWebClient(
        token=settings.slack_bot_token,
        timeout=int(max(1, round(float(settings.slack_timeout_seconds)))),
    )


class SlackMessenger:
    """Messenger port implemented on top of slack_sdk's AsyncWebClient."""

    def __init__(self, client: AsyncWebClient) -> None:
        self._client = client

    async def open_view(self, *, trigger_id: str, view: SlackView) -> None:
        await self._client.views_open(trigger_id=trigger_id, view=view)
        logger.debug("Opened view callback_id=%s", view.get("callback_id"))

    async def send_text(self, *, channel: str, text: str) -> None:
        await self._client.chat_postMessage(channel=channel, text=text, mrkdwn=True)

    async def send_ephemeral(self, *, channel: str, user_id: str, text: str) -> None:
        await self._client.chat_postEphemeral(channel=channel, user=user_id, text=text)
