# src/slack_taskbot/server.py

"""
HTTP surface.

Bolt's AsyncApp serves Slack callbacks (signature-checked by Bolt) on settings.events_path;
GET / is an unauthenticated liveness check.
"""

from __future__ import annotations

import logging

from aiohttp import web
from slack_bolt.async_app import AsyncApp

from .connectors.slack_messenger import create_web_client
from .core.state import AppState
from .interactions.handlers import register_handlers

logger = logging.getLogger(__name__)

LIVENESS_TEXT = "Slack reminder bot is running."


async def liveness(_request: web.Request) -> web.Response:
    return web.Response(text=LIVENESS_TEXT)


def create_bolt_app(state: AppState) -> AsyncApp:
    settings = state.settings
    app = AsyncApp(
        client=create_web_client(settings),
        signing_secret=settings.slack_signing_secret,
        name=settings.app_name,
    )
    register_handlers(app, state)
    return app


def create_web_app(state: AppState) -> web.Application:
    settings = state.settings
    bolt_app = create_bolt_app(state)
    web_app = bolt_app.web_app(path=settings.events_path, port=settings.port)
    web_app.router.add_get("/", liveness)
    logger.info("Routes ready: POST %s (Slack), GET / (liveness)", settings.events_path)
    return web_app


def run_server(state: AppState) -> None:
    port = int(state.settings.port)
    web_app = create_web_app(state)
    logger.info("Slack Bolt receiver listening on port %s", port)
    web.run_app(web_app, port=port, print=None)
