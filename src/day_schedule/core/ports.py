# src/day_schedule/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The scheduler depends on Protocols instead of concrete implementations.
This keeps storage and notification channels swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..schedule.task_models import Task


class Notifier(Protocol):
    """
    Receives plain-text schedule events ("Task added: ...", conflicts, ...).

    Implementations should not raise; the scheduler discards anything they do raise.
    """

    def update(self, message: str) -> None: ...


class TaskPersistence(Protocol):
    """
    Durable storage for the whole task list.

    - load_all never raises: any problem yields an empty list.
    - save_all writes the complete collection atomically and raises on failure.
    """

    async def load_all(self) -> list[Task]: ...

    async def save_all(self, tasks: Sequence[Task]) -> None: ...
