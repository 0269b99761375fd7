# src/day_schedule/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit")

InputFunc = Callable[[str], str]


def run_console_loop(
    state: AppState,
    *,
    loop: asyncio.AbstractEventLoop,
    input_func: InputFunc = input,
    output: Callable[[str], None] = print,
) -> None:
    """
    Interactive line loop: one command at a time, so scheduler calls are never interleaved.

    input() runs on the main thread so Ctrl+C interrupts it directly; each command's
    coroutine is driven to completion on `loop` before the next line is read.
    """
    logger.info("Console connector started.")

    async def ask(prompt: str) -> str:
        return input_func(prompt).strip()

    output(command_registry.build_help())

    while True:
        try:
            line = input_func("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output("")
            break

        if line.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            output("Exiting... Goodbye!")
            break

        try:
            reply = loop.run_until_complete(command_registry.handle(state, line, ask=ask, emit=output))
        except EOFError:
            logger.info("Console input closed mid-command, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt mid-command, exiting.")
            output("")
            break
        except Exception as e:
            logger.exception("Command handler crashed.")
            reply = f"Unexpected error: {e}"

        output(reply)

    logger.info("Console connector finished.")
