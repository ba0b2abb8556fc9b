# src/slack_taskbot/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (fatal on bad config or unreachable store),
then serves Slack callbacks until interrupted.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import ConfigError, get_settings
from ..logging_setup import setup_logging
from ..server import run_server

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logging.getLogger("slack_bolt").setLevel(max(console_level, logging.INFO))
    logging.getLogger("slack_sdk").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

    logger.info("Starting %s... (log file %s)", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)
    except Exception:
        logger.exception("Task store initialisation failed.")
        sys.exit(1)

    run_server(state)
    logger.info("Bye.")


if __name__ == "__main__":
    main()
