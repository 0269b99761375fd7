# src/day_schedule/schedule/scheduler.py

from __future__ import annotations

"""
Interval scheduler.

Holds the day's tasks sorted by start time and guarantees that no two of them
overlap. Every mutation:
- finds the insertion point with a binary search on start_minutes,
- checks only the two neighbours at that point (the rest of the list is already
  conflict-free),
- commits in memory, awaits the store, then broadcasts a text event.

Single writer: callers must serialize mutating calls (the CLI loop does).
"""

import logging
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass, replace
from operator import attrgetter

from ..core.ports import Notifier, TaskPersistence
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

NOT_FOUND = "Task not found."

_start_key = attrgetter("start_minutes")


@dataclass(slots=True, frozen=True)
class OperationResult:
    success: bool
    message: str
    task: Task | None = None


@dataclass(slots=True, frozen=True)
class TaskUpdates:
    """Sparse overrides for edit_task; None keeps the current value."""

    title: str | None = None
    start_minutes: int | None = None
    end_minutes: int | None = None
    priority: Priority | None = None
    description: str | None = None


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # Half-open intervals: touching (a_end == b_start) is not an overlap.
    return a_start < b_end and b_start < a_end


def find_insert_index(tasks: Sequence[Task], start_minutes: int) -> int:
    """Leftmost index keeping `tasks` sorted by start_minutes."""
    return bisect_left(tasks, start_minutes, key=_start_key)


def find_conflict(tasks: Sequence[Task], candidate: Task) -> tuple[int, Task | None]:
    """
    Return (insert_index, conflicting_neighbour_or_None) for `candidate`.

    Only the predecessor and the successor at the insert index are checked.
    """
    idx = find_insert_index(tasks, candidate.start_minutes)

    if idx > 0:
        prev = tasks[idx - 1]
        if overlaps(prev.start_minutes, prev.end_minutes, candidate.start_minutes, candidate.end_minutes):
            return idx, prev

    if idx < len(tasks):
        nxt = tasks[idx]
        if overlaps(nxt.start_minutes, nxt.end_minutes, candidate.start_minutes, candidate.end_minutes):
            return idx, nxt

    return idx, None


class IntervalScheduler:
    """
    The day's schedule.

    Construct one per process (IntervalScheduler.create(store)) and hand it to
    every caller; there is no module-level instance.
    """

    def __init__(self, store: TaskPersistence) -> None:
        self._store = store
        self._tasks: list[Task] = []
        self._notifiers: list[Notifier] = []

    @classmethod
    async def create(cls, store: TaskPersistence) -> IntervalScheduler:
        scheduler = cls(store)
        await scheduler.load()
        return scheduler

    # ---- subscriptions ----

    def subscribe(self, notifier: Notifier) -> None:
        if any(n is notifier for n in self._notifiers):
            return
        self._notifiers.append(notifier)

    def unsubscribe(self, notifier: Notifier) -> None:
        self._notifiers = [n for n in self._notifiers if n is not notifier]

    def _notify(self, message: str) -> None:
        """
        Best-effort broadcast.

        Listeners are called in subscription order; whatever one of them raises is
        logged and dropped so the others still get the message and the mutating
        call still returns its own result. This is not a delivery guarantee.
        """
        for notifier in list(self._notifiers):
            try:
                notifier.update(message)
            except Exception:
                logger.debug("Notifier %r failed; ignoring.", notifier, exc_info=True)

    # ---- loading / persistence ----

    async def load(self) -> None:
        try:
            loaded = await self._store.load_all()
            tasks = sorted(loaded, key=_start_key)
        except Exception:
            logger.exception("Loading tasks failed; starting with an empty schedule.")
            self._tasks = []
            return

        for prev, nxt in zip(tasks, tasks[1:]):
            if prev.end_minutes > nxt.start_minutes:
                logger.warning(
                    "Stored tasks overlap: %r (%s) and %r (%s)",
                    prev.title,
                    prev.time_range,
                    nxt.title,
                    nxt.time_range,
                )

        self._tasks = tasks
        logger.info("Tasks loaded from storage: %d", len(tasks))

    async def _persist(self) -> str | None:
        """Save the full collection. Returns an error message on failure."""
        try:
            await self._store.save_all(list(self._tasks))
        except Exception as e:
            logger.exception("Saving tasks failed.")
            return f"Failed to save tasks: {e}"
        return None

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    # ---- mutations ----

    async def add_task(self, task: Task) -> OperationResult:
        candidate = replace(task)
        idx, conflict = find_conflict(self._tasks, candidate)

        if conflict is not None:
            msg = f'Task conflicts with existing task "{conflict.title}" ({conflict.time_range}).'
            self._notify(msg)
            logger.info("Add conflict: %s", msg)
            return OperationResult(False, msg)

        self._tasks.insert(idx, candidate)

        err = await self._persist()
        if err:
            return OperationResult(False, err)

        logger.info("Task added: %s (%s)", candidate.title, candidate.time_range)
        self._notify(f"Task added: {candidate.title} ({candidate.time_range})")
        return OperationResult(True, "Task added successfully.", replace(candidate))

    async def edit_task(self, task_id: str, updates: TaskUpdates) -> OperationResult:
        idx = self._index_of(task_id)
        if idx == -1:
            logger.info("Edit failed: no task with id=%s", task_id)
            return OperationResult(False, NOT_FOUND)

        original = self._tasks[idx]
        updated = replace(
            original,
            title=original.title if updates.title is None else updates.title,
            start_minutes=original.start_minutes if updates.start_minutes is None else updates.start_minutes,
            end_minutes=original.end_minutes if updates.end_minutes is None else updates.end_minutes,
            priority=original.priority if updates.priority is None else updates.priority,
            description=original.description if updates.description is None else updates.description,
        )

        msg = None
        if not updated.title.strip():
            msg = "Title is required."
        elif updated.end_minutes <= updated.start_minutes:
            msg = "End time must be after start time."
        if msg:
            logger.info("Edit rejected id=%s: %s", task_id, msg)
            return OperationResult(False, msg)

        # Check against the list without the original so a task never conflicts with itself.
        remaining = self._tasks[:idx] + self._tasks[idx + 1 :]
        insert_idx, conflict = find_conflict(remaining, updated)

        if conflict is not None:
            msg = f'Edit conflicts with existing task "{conflict.title}" ({conflict.time_range}).'
            logger.info("Edit conflict: %s", msg)
            self._notify(msg)
            return OperationResult(False, msg)

        remaining.insert(insert_idx, updated)
        self._tasks = remaining

        err = await self._persist()
        if err:
            return OperationResult(False, err)

        logger.info("Task edited: %s (%s)", updated.title, updated.time_range)
        self._notify(f"Task edited: {updated.title}")
        return OperationResult(True, "Task edited successfully.", replace(updated))

    async def remove_task_by_id(self, task_id: str) -> OperationResult:
        idx = self._index_of(task_id)
        if idx == -1:
            logger.info("Remove failed: no task with id=%s", task_id)
            return OperationResult(False, NOT_FOUND)

        removed = self._tasks.pop(idx)

        err = await self._persist()
        if err:
            return OperationResult(False, err)

        logger.info("Task removed: %s", removed.title)
        self._notify(f"Task removed: {removed.title}")
        return OperationResult(True, "Task removed successfully.", removed)

    async def mark_completed(self, task_id: str) -> OperationResult:
        idx = self._index_of(task_id)
        if idx == -1:
            logger.info("Complete failed: no task with id=%s", task_id)
            return OperationResult(False, NOT_FOUND)

        task = self._tasks[idx]
        task.completed = True

        err = await self._persist()
        if err:
            return OperationResult(False, err)

        logger.info("Task completed: %s", task.title)
        self._notify(f"Task completed: {task.title}")
        return OperationResult(True, "Task marked as completed.", replace(task))

    # ---- queries ----

    def list_tasks(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

    def list_tasks_by_priority(self, priority: str | None) -> list[Task]:
        wanted = (priority or "").strip().lower()
        if not wanted:
            return []
        return [replace(t) for t in self._tasks if t.priority.value.lower() == wanted]

    def find_tasks_by_title(self, title: str | None) -> list[Task]:
        q = (title or "").strip().lower()
        return [replace(t) for t in self._tasks if t.title.lower() == q]

    def find_task_by_id(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return replace(self._tasks[idx]) if idx != -1 else None

    def __len__(self) -> int:
        return len(self._tasks)
