# src/day_schedule/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the JSON store, the task factory and the scheduler into AppState,
- subscribes the console notifier.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_notifier import ConsoleNotifier
from ..core.ports import Notifier
from ..core.state import AppState
from ..schedule.scheduler import IntervalScheduler
from ..schedule.task_factory import TaskFactory
from ..schedule.task_store import JsonTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


async def create_initial_state(*, settings=None, notifiers: list[Notifier] | None = None) -> AppState:
    """
    Create AppState from the provided settings and load the persisted schedule.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). If notifiers is None, a ConsoleNotifier
    is subscribed when settings.console_notifications is on.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = JsonTaskStore(settings.tasks_path)
    scheduler = await IntervalScheduler.create(store)

    factory = TaskFactory()
    factory.reserve_ids({t.id for t in scheduler.list_tasks()})

    if notifiers is None:
        notifiers = [ConsoleNotifier()] if getattr(settings, "console_notifications", True) else []
    for n in notifiers:
        scheduler.subscribe(n)

    logger.info("Schedule ready: %d tasks from %s", len(scheduler), settings.tasks_path)
    return AppState(
        settings=settings,
        store=store,
        scheduler=scheduler,
        factory=factory,
        notifiers=list(notifiers),
    )
