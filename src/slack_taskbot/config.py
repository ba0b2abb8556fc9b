# src/slack_taskbot/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time; `Settings.require()` is the startup gate.
- Prefixed names (TASKBOT_*) win over the conventional Slack/Heroku-style names.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOT"


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or unusable."""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Slack ----
    slack_bot_token: str
    slack_signing_secret: str
    slack_timeout_seconds: float

    # ---- Store ----
    database_url: str
    store_timeout_seconds: float

    # ---- HTTP ----
    port: int
    events_path: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "slack-taskbot").strip() or "slack-taskbot"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/taskbot"))

        slack_bot_token = (_first_env(_k("SLACK_BOT_TOKEN"), "SLACK_BOT_TOKEN", default="") or "").strip()
        slack_signing_secret = (
            _first_env(_k("SLACK_SIGNING_SECRET"), "SLACK_SIGNING_SECRET", default="") or ""
        ).strip()
        slack_timeout_seconds = _env_float(_k("SLACK_TIMEOUT_SECONDS"), 10.0)

        database_url = (_first_env(_k("DATABASE_URL"), "DATABASE_URL", default="") or "").strip()
        # Slack drops an options request that is not answered within 3 seconds.
        store_timeout_seconds = _env_float(_k("STORE_TIMEOUT_SECONDS"), 2.5)

        port = _parse_int(_first_env(_k("PORT"), "PORT"), 3000)
        events_path = _env(_k("EVENTS_PATH"), "/slack/events").strip() or "/slack/events"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            slack_bot_token=slack_bot_token,
            slack_signing_secret=slack_signing_secret,
            slack_timeout_seconds=max(0.1, slack_timeout_seconds),
            database_url=database_url,
            store_timeout_seconds=max(0.1, store_timeout_seconds),
            port=port,
            events_path=events_path,
        )

    def missing_required(self) -> list[str]:
        """Names of required env vars that are not set."""
        missing: list[str] = []
        if not self.slack_bot_token:
            missing.append("SLACK_BOT_TOKEN")
        if not self.slack_signing_secret:
            missing.append("SLACK_SIGNING_SECRET")
        if not self.database_url:
            missing.append("DATABASE_URL")
        return missing

    def require(self) -> "Settings":
        missing = self.missing_required()
        if missing:
            raise ConfigError(
                "Missing required environment variables: " + ", ".join(missing) + "."
            )
        if not (0 < self.port < 65536):
            raise ConfigError(f"PORT out of range: {self.port}")
        return self


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
