# src/day_schedule/schedule/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from .task_models import Task

logger = logging.getLogger(__name__)


class JsonTaskStore:
    """
    JSON file task store.

    The whole collection lives in one file as a JSON array of task records.

    Writes are atomic:
    - serialize to "<file>.tmp" next to the target
    - os.replace() the temp file onto the target

    A crash mid-write leaves either the old file or the new one, never a partial one.
    File IO runs in a worker thread so callers can await it from the event loop.
    """

    def __init__(self, path: str | Path = "data/tasks.json") -> None:
        self._path = Path(path)
        self._tmp_path = self._path.with_name(self._path.name + ".tmp")

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _ensure_file(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._path.write_text("[]", "utf-8")
            logger.info("JsonTaskStore created empty file %s", self._path)

    def _read_sync(self) -> list[Task]:
        self._ensure_file()
        data = json.loads(self._path.read_text("utf-8") or "[]")
        if not isinstance(data, list):
            logger.warning("Task file %s does not hold a list; ignoring it.", self._path)
            return []

        out: list[Task] = []
        for i, raw in enumerate(data):
            if not isinstance(raw, dict):
                logger.warning("Skipping task record #%d: not an object", i)
                continue
            try:
                out.append(Task.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping task record #%d: %s", i, e)
        return out

    def _write_sync(self, records: list[dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(records, ensure_ascii=False, indent=2)
        try:
            self._tmp_path.write_text(payload, "utf-8")
            os.replace(self._tmp_path, self._path)
        except Exception:
            with contextlib.suppress(OSError):
                self._tmp_path.unlink()
            raise

    # ---- public API ----

    async def load_all(self) -> list[Task]:
        try:
            tasks = await asyncio.to_thread(self._read_sync)
        except Exception:
            logger.exception("Failed to load tasks from %s; starting empty.", self._path)
            return []
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    async def save_all(self, tasks: Sequence[Task]) -> None:
        # Snapshot on the caller's side so later in-memory changes can't leak into this write.
        records = [t.to_dict() for t in tasks]
        await asyncio.to_thread(self._write_sync, records)
        logger.debug("Saved %d tasks to %s", len(records), self._path)
