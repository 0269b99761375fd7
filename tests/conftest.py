# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from day_schedule.core.state import AppState
from day_schedule.schedule.scheduler import IntervalScheduler
from day_schedule.schedule.task_factory import TaskFactory
from day_schedule.schedule.task_store import JsonTaskStore

from .fakes import InMemoryTaskStore, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        console_notifications=False,
        data_dir=data_dir,
        tasks_path=data_dir / "tasks.json",
    )


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def scheduler(memory_store: InMemoryTaskStore, notifier: RecordingNotifier) -> IntervalScheduler:
    s = IntervalScheduler(memory_store)
    s.subscribe(notifier)
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, notifier: RecordingNotifier) -> AppState:
    """
    AppState wired with a real JsonTaskStore on tmp_path.

    The store's file format and atomic writes are part of what we want to test.
    """
    store = JsonTaskStore(settings.tasks_path)
    scheduler = IntervalScheduler(store)
    scheduler.subscribe(notifier)
    return AppState(
        settings=settings,
        store=store,
        scheduler=scheduler,
        factory=TaskFactory(),
        notifiers=[notifier],
    )
