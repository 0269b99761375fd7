# tests/test_task_factory.py

from __future__ import annotations

import random

import pytest

from day_schedule.schedule.task_factory import TaskFactory, TaskValidationError, parse_time_to_minutes
from day_schedule.schedule.task_models import Priority, Task, minutes_to_hhmm


@pytest.mark.parametrize(
    ("text", "minutes"),
    [("00:00", 0), ("9:05", 545), ("09:00", 540), ("23:59", 1439)],
)
def test_parse_time(text: str, minutes: int) -> None:
    assert parse_time_to_minutes(text) == minutes


@pytest.mark.parametrize(
    "text",
    ["", "9", "09-00", "9:5", "123:00", "ab:cd", "24:00", "12:60", "09:00\n", "０９:００"],
)
def test_parse_time_rejects(text: str) -> None:
    with pytest.raises(TaskValidationError):
        parse_time_to_minutes(text)


def test_minutes_to_hhmm() -> None:
    assert minutes_to_hhmm(0) == "00:00"
    assert minutes_to_hhmm(545) == "09:05"
    assert minutes_to_hhmm(1440) == "24:00"


def test_create_normalizes_input() -> None:
    task = TaskFactory().create("  Standup  ", "09:00", "09:30", " hIgH ", "  daily  ")

    assert task.title == "Standup"
    assert task.description == "daily"
    assert (task.start_minutes, task.end_minutes) == (540, 570)
    assert task.priority is Priority.HIGH
    assert task.completed is False
    assert task.created_at > 0


def test_blank_description_becomes_none() -> None:
    task = TaskFactory().create("Standup", "09:00", "09:30", "low", "   ")
    assert task.description is None


@pytest.mark.parametrize(
    ("title", "start", "end", "priority"),
    [
        ("Standup", "10:00", "09:00", "Low"),
        ("Standup", "10:00", "10:00", "Low"),
        ("Standup", "10:00", "11:00", "urgent"),
        ("Standup", "10:00", "11:00", ""),
        ("   ", "10:00", "11:00", "Low"),
        ("Standup", "25:00", "26:00", "Low"),
    ],
)
def test_create_rejects_invalid(title: str, start: str, end: str, priority: str) -> None:
    with pytest.raises(TaskValidationError):
        TaskFactory().create(title, start, end, priority)


def test_ids_are_never_reused() -> None:
    # A one-value RNG forces collisions within the same millisecond.
    class StuckRandom(random.Random):
        def __init__(self) -> None:
            super().__init__(0)
            self.calls = 0

        def randrange(self, *args, **kwargs) -> int:
            self.calls += 1
            return 7 if self.calls % 50 else self.calls

    factory = TaskFactory(rng=StuckRandom())
    ids = {factory.create(f"T{i}", "09:00", "10:00", "low").id for i in range(20)}
    assert len(ids) == 20


def test_reserved_ids_are_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    class FixedRandom(random.Random):
        def __init__(self) -> None:
            super().__init__(0)
            self.values = [2, 2, 3]

        def randrange(self, *args, **kwargs) -> int:
            return self.values.pop(0)

    monkeypatch.setattr("day_schedule.schedule.task_factory.time.time", lambda: 1.0)
    factory = TaskFactory(rng=FixedRandom())
    factory.reserve_ids({"1000-2"})

    assert factory.new_id() == "1000-3"


def test_display_string() -> None:
    task = Task(id="a", title="Standup", start_minutes=540, end_minutes=600, priority=Priority.HIGH)
    assert task.to_display_string() == "09:00 - 10:00: Standup [High]  "
    task.completed = True
    assert task.to_display_string() == "09:00 - 10:00: Standup [High] ✓"
