# src/day_schedule/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    The console is shared with the REPL prompt, so only lines the reply doesn't already say pass:
    - scheduler and notifier per-operation lines repeat the command reply and the
      [NOTIFICATION] echo; they go to the file, the console gets WARNING+ only
    - store warnings (skipped records, bad file) and startup/shutdown lines pass
    - captured warnings and anything outside day_schedule need ERROR+
    """

    _FILE_ONLY_BELOW_WARNING = (
        "day_schedule.schedule.scheduler",
        "day_schedule.connectors.console_notifier",
    )

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("day_schedule."):
            if name.startswith(self._FILE_ONLY_BELOW_WARNING):
                return record.levelno >= logging.WARNING
            return True

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = "logs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure logging with:
    - Console handler: filtered for interactive use
    - File handler: full log at <log_dir>/app.log

    Call this ONCE, very early (before first logger.info). Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
