# src/day_schedule/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..core.ports import Notifier, TaskPersistence
from ..schedule.scheduler import IntervalScheduler
from ..schedule.task_factory import TaskFactory


@dataclass
class AppState:
    # Settings live on the state so front ends don't read global config.
    settings: object

    # Held for shutdown: cli.main flushes the store and detaches the notifiers.
    store: TaskPersistence
    scheduler: IntervalScheduler
    factory: TaskFactory

    notifiers: list[Notifier] = field(default_factory=list)
