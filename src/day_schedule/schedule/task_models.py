# src/day_schedule/schedule/task_models.py

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

MINUTES_PER_DAY = 24 * 60


def minutes_to_hhmm(mins: int) -> str:
    h, m = divmod(int(mins), 60)
    return f"{h:02d}:{m:02d}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str | None) -> Priority:
        """Case-insensitive lookup: ' high ' -> Priority.HIGH."""
        normalized = (raw or "").strip().lower()
        for p in cls:
            if p.value.lower() == normalized:
                return p
        raise ValueError("Priority must be Low, Medium or High.")


@dataclass(slots=True)
class Task:
    """
    One interval of the day, [start_minutes, end_minutes) in minutes since midnight.

    Instances are owned by IntervalScheduler once stored: edits produce a new Task
    with the same id, only `completed` is flipped in place.
    """

    id: str
    title: str
    start_minutes: int
    end_minutes: int
    priority: Priority
    description: str | None = None
    completed: bool = False
    created_at: int = field(default_factory=_now_ms)

    @property
    def start_hhmm(self) -> str:
        return minutes_to_hhmm(self.start_minutes)

    @property
    def end_hhmm(self) -> str:
        return minutes_to_hhmm(self.end_minutes)

    @property
    def time_range(self) -> str:
        return f"{self.start_hhmm}-{self.end_hhmm}"

    def to_display_string(self) -> str:
        status = "✓" if self.completed else " "
        return f"{self.start_hhmm} - {self.end_hhmm}: {self.title} [{self.priority.value}] {status}"

    # ---- persistence ----

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "startMinutes": self.start_minutes,
            "endMinutes": self.end_minutes,
            "priority": self.priority.value,
            "completed": self.completed,
            "createdAt": self.created_at,
        }
        if self.description is not None:
            out["description"] = self.description
        return out

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> Task:
        """Build a Task from a persisted record. Raises KeyError/ValueError/TypeError on bad data."""
        start = int(obj["startMinutes"])
        end = int(obj["endMinutes"])
        if not (0 <= start < end <= MINUTES_PER_DAY):
            raise ValueError(f"invalid interval {start}-{end}")

        title = str(obj["title"]).strip()
        if not title:
            raise ValueError("title is required")

        description = obj.get("description")
        return cls(
            id=str(obj["id"]),
            title=title,
            start_minutes=start,
            end_minutes=end,
            priority=Priority.parse(obj.get("priority")),
            description=str(description) if description is not None else None,
            completed=bool(obj.get("completed", False)),
            created_at=int(obj.get("createdAt") or 0),
        )
