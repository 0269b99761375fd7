# src/day_schedule/connectors/console_notifier.py

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Prints schedule events to the terminal and mirrors them into the log file."""

    __slots__ = ("_write",)

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def update(self, message: str) -> None:
        self._write(f"\n[NOTIFICATION] {message}\n")
        logger.info("[NOTIFY] %s", message)
