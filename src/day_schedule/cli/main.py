# src/day_schedule/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loads the schedule), then runs the console REPL
on the main thread. Exit code: 0 on graceful exit (exit, EOF, Ctrl+C), 1 if startup fails.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState, loop: asyncio.AbstractEventLoop) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    for n in state.notifiers:
        state.scheduler.unsubscribe(n)

    # Final flush: covers a mutation whose save failed earlier in the session.
    try:
        loop.run_until_complete(state.store.save_all(state.scheduler.list_tasks()))
    except Exception:
        logger.exception("Final save of tasks failed.")


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    try:
        setup_logging(log_dir=settings.log_dir, console_level=console_level)
    except OSError as e:
        print(f"Failed to start app: {e}", file=sys.stderr)
        return 1

    logger.info("Starting %s...", settings.app_name)

    loop = asyncio.new_event_loop()
    try:
        try:
            state = loop.run_until_complete(create_initial_state(settings=settings))
        except Exception as e:
            logger.exception("Startup failed.")
            print(f"Failed to start app: {e}", file=sys.stderr)
            return 1

        try:
            run_console_loop(state, loop=loop)
        finally:
            _shutdown(state, loop)
    finally:
        loop.close()
        logger.info("CLI closed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
