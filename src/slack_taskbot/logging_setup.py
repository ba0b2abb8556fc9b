# src/slack_taskbot/logging_setup.py

"""
Process-wide logging for the bot.

stderr gets a filtered stream (our own records plus library warnings); the log file under
settings.log_dir gets everything at file_level. Slack callbacks arrive several times per
interaction, so Bolt, the SDK and aiohttp's access log stay off the console below WARNING.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskbot.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Minimum console level per logger-name prefix; the longest matching prefix wins.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "slack_taskbot": logging.NOTSET,
    "slack_bolt": logging.WARNING,
    "slack_sdk": logging.WARNING,
    "aiohttp.access": logging.WARNING,
    "py.warnings": logging.ERROR,
}
DEFAULT_CONSOLE_THRESHOLD = logging.ERROR


def console_threshold(logger_name: str) -> int:
    best, best_len = DEFAULT_CONSOLE_THRESHOLD, -1
    for prefix, level in CONSOLE_THRESHOLDS.items():
        matches = logger_name == prefix or logger_name.startswith(prefix + ".")
        if matches and len(prefix) > best_len:
            best, best_len = level, len(prefix)
    return best


class _ConsoleNoiseFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name)


def _build_handlers(log_file: Path, console_level: int, file_level: int) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)

    handlers: list[logging.Handler] = [console, file_handler]
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskbot",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Replace the root logger's handlers with the console + file pair and return the log file path.

    main() calls it before the store is opened, so startup failures reach the log file.
    Calling it again swaps the handlers instead of stacking a second pair.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in _build_handlers(log_file, console_level, file_level):
        root.addHandler(handler)

    # warnings.warn(...) is routed to the "py.warnings" logger.
    logging.captureWarnings(True)
    return log_file
