# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from day_schedule.schedule.task_models import Priority, Task


def make_task(
    task_id: str,
    title: str,
    start: int,
    end: int,
    priority: Priority = Priority.MEDIUM,
    description: str | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title,
        start_minutes=start,
        end_minutes=end,
        priority=priority,
        description=description,
        created_at=1_700_000_000_000,
    )


class InMemoryTaskStore:
    """
    In-memory TaskPersistence used for scheduler unit tests.

    Records every save so tests can assert on persistence side effects.
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks = [replace(t) for t in tasks or []]
        self.saves: list[list[Task]] = []

    async def load_all(self) -> list[Task]:
        return [replace(t) for t in self.tasks]

    async def save_all(self, tasks: Sequence[Task]) -> None:
        snapshot = [replace(t) for t in tasks]
        self.saves.append(snapshot)
        self.tasks = snapshot


class FailingSaveStore(InMemoryTaskStore):
    async def save_all(self, tasks: Sequence[Task]) -> None:
        raise OSError("disk full")


class ExplodingLoadStore(InMemoryTaskStore):
    async def load_all(self) -> list[Task]:
        raise RuntimeError("corrupt")


@dataclass(slots=True)
class RecordingNotifier:
    messages: list[str] = field(default_factory=list)

    def update(self, message: str) -> None:
        self.messages.append(message)


class BrokenNotifier:
    def update(self, message: str) -> None:
        raise RuntimeError("listener down")


class ScriptedInput:
    """Feeds answers to prompts in order; raises EOFError when exhausted."""

    def __init__(self, answers: list[str]) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    async def ask(self, prompt: str) -> str:
        return self(prompt).strip()
