# src/day_schedule/schedule/task_factory.py

"""
Validating constructor for Task values.

This is the only place that turns raw user input (HH:MM strings, priority words)
into Task objects; the scheduler assumes every Task it receives is well-formed.
"""

from __future__ import annotations

import logging
import random
import re
import time

from .task_models import Priority, Task

logger = logging.getLogger(__name__)

_HHMM_RE = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)


class TaskValidationError(ValueError):
    """Raised for malformed times, unknown priorities and non-positive durations."""


def parse_time_to_minutes(text: str) -> int:
    m = _HHMM_RE.fullmatch(text or "")
    if not m:
        raise TaskValidationError("Invalid time format. Expected HH:mm")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise TaskValidationError("Invalid time. Hours must be 0-23 and minutes 0-59.")
    return hh * 60 + mm


def parse_priority(raw: str | None) -> Priority:
    try:
        return Priority.parse(raw)
    except ValueError as e:
        raise TaskValidationError(str(e)) from e


class TaskFactory:
    """
    Creates validated tasks with process-unique ids.

    Ids look like "<epoch_ms>-<0..9999>"; the factory remembers what it handed out
    so an id is never issued twice, even within the same millisecond.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._issued: set[str] = set()

    def reserve_ids(self, ids: set[str] | list[str]) -> None:
        """Mark already persisted ids as taken."""
        self._issued.update(ids)

    def new_id(self) -> str:
        while True:
            candidate = f"{int(time.time() * 1000)}-{self._rng.randrange(10000)}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def create(
        self,
        title: str,
        start_hhmm: str,
        end_hhmm: str,
        priority: str,
        description: str | None = None,
    ) -> Task:
        clean_title = (title or "").strip()
        if not clean_title:
            raise TaskValidationError("Title is required.")

        start = parse_time_to_minutes(start_hhmm)
        end = parse_time_to_minutes(end_hhmm)
        if end <= start:
            raise TaskValidationError("End time must be after start time.")

        prio = parse_priority(priority)
        clean_description = (description or "").strip() or None

        task = Task(
            id=self.new_id(),
            title=clean_title,
            start_minutes=start,
            end_minutes=end,
            priority=prio,
            description=clean_description,
        )
        logger.debug("Task created id=%s title=%r %s", task.id, task.title, task.time_range)
        return task
