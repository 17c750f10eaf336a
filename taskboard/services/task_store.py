"""In-memory task store.

The store is shared by every request handled by the process. It is not a
module-level singleton: the application factory creates one instance and
places it on ``app.state``, and handlers receive it through a dependency.
Data does not survive a restart.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from taskboard.core.errors import InvalidInputError

logger = logging.getLogger(__name__)


class Task(BaseModel):
    """A single task record."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str


class TaskStore:
    """Ordered, append-only collection of tasks with sequential ids."""

    def __init__(self, titles: Iterable[str] = ()):
        """Initialize the store.

        Args:
            titles: Optional titles to add in order (blank ones are skipped)
        """
        self._lock = threading.Lock()
        self._tasks: list[Task] = []
        self._last_id = 0
        for title in titles:
            if title.strip():
                self.add(title)

    def all(self) -> list[Task]:
        """Return a snapshot of all tasks in insertion order."""
        with self._lock:
            return list(self._tasks)

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            for task in self._tasks:
                if task.id == task_id:
                    return task
        return None

    def add(self, title: str) -> Task:
        """Append a new task.

        Raises:
            InvalidInputError: If the title is blank after trimming
        """
        cleaned = title.strip()
        if not cleaned:
            raise InvalidInputError("title", title, "Task title must not be blank")

        with self._lock:
            self._last_id += 1
            task = Task(id=self._last_id, title=cleaned)
            self._tasks.append(task)

        logger.info("Added task %d", task.id)
        return task

    def delete(self, task_id: int) -> bool:
        """Remove the task with ``task_id``; unknown ids are ignored.

        Returns:
            True if a task was removed
        """
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    del self._tasks[index]
                    break
            else:
                logger.debug("Delete ignored, no task with id %d", task_id)
                return False

        logger.info("Deleted task %d", task_id)
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
