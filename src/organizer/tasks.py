"""Persisted task list with newest-first ordering."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

from storage import KeyValueStore, PersistenceUnavailableError

TASKS_KEY = "zenfocus_tasks"
MAX_TASK_TEXT_LENGTH = 500


@dataclass(frozen=True)
class Task:
    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class TaskList:
    """Task CRUD over a single persisted list; every mutation is saved."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock_ms: Optional[Callable[[], int]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._store = store
        self._clock_ms = clock_ms or (lambda: int(time.time() * 1000))
        self._logger = logger or logging.getLogger("organizer.tasks")
        self._lock = threading.Lock()
        self._tasks: list[Task] = self._load()
        self._last_id = max((task.id for task in self._tasks), default=0)

    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    def remaining_count(self) -> int:
        with self._lock:
            return sum(1 for task in self._tasks if not task.completed)

    def add(self, text: str) -> Optional[Task]:
        cleaned = (text or "").strip()[:MAX_TASK_TEXT_LENGTH]
        if not cleaned:
            return None

        with self._lock:
            task = Task(id=self._next_id_locked(), text=cleaned)
            self._tasks.insert(0, task)
            self._save_locked()
        self._logger.info("Task added: id=%s", task.id)
        return task

    def toggle(self, task_id: int) -> Optional[Task]:
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    updated = Task(id=task.id, text=task.text, completed=not task.completed)
                    self._tasks[index] = updated
                    self._save_locked()
                    return updated
        self._logger.debug("Toggle ignored, unknown task id: %s", task_id)
        return None

    def delete(self, task_id: int) -> bool:
        with self._lock:
            remaining = [task for task in self._tasks if task.id != task_id]
            if len(remaining) == len(self._tasks):
                return False
            self._tasks = remaining
            self._save_locked()
        self._logger.info("Task deleted: id=%s", task_id)
        return True

    def _next_id_locked(self) -> int:
        candidate = max(self._clock_ms(), self._last_id + 1)
        self._last_id = candidate
        return candidate

    def _load(self) -> list[Task]:
        try:
            raw = self._store.load(TASKS_KEY)
        except PersistenceUnavailableError as error:
            self._logger.warning("Task list unavailable, starting empty: %s", error)
            return []

        if raw is None:
            return []
        if not isinstance(raw, list):
            self._logger.warning("Ignoring malformed task list: %r", raw)
            return []

        tasks: list[Task] = []
        for item in raw:
            task = _parse_task(item)
            if task is None:
                self._logger.warning("Skipping malformed task entry: %r", item)
                continue
            tasks.append(task)
        return tasks

    def _save_locked(self) -> None:
        try:
            self._store.save(TASKS_KEY, [task.to_dict() for task in self._tasks])
        except PersistenceUnavailableError as error:
            self._logger.warning("Failed to persist task list: %s", error)


def _parse_task(item: Any) -> Optional[Task]:
    if not isinstance(item, dict):
        return None
    task_id = item.get("id")
    text = item.get("text")
    completed = item.get("completed", False)
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    if not isinstance(completed, bool):
        return None
    return Task(id=task_id, text=text, completed=completed)
