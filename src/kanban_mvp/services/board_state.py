"""Authoritative in-memory task collection."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..models import Task

logger = logging.getLogger(__name__)

RenderCallback = Callable[[list[Task]], None]


class BoardState:
    """
    Owns the board's task collection.

    Readers get deep copies from `get_snapshot`; writers replace the whole
    collection with `replace_all`. Nothing outside this object holds a
    reference to the stored tasks, so there is no copy that can drift.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = []
        self._subscribers: list[RenderCallback] = []
        self._set(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get_snapshot(self) -> list[Task]:
        """Return a deep copy of the collection in board order."""
        return [task.model_copy(deep=True) for task in self._tasks]

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """
        Replace the whole collection and trigger a re-render.

        Raises:
            ValueError: If two tasks share an ID. The state is unchanged.
        """
        self._set(tasks)
        logger.debug("Board replaced: %d tasks", len(self._tasks))

        snapshot = self.get_snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)

    def subscribe(self, callback: RenderCallback) -> Callable[[], None]:
        """
        Register a render trigger called after every replace_all.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def get(self, task_id: str) -> Task | None:
        """Get a copy of a task by ID."""
        for task in self._tasks:
            if task.id == task_id:
                return task.model_copy(deep=True)
        return None

    def index_of(self, task_id: str) -> int:
        """Position of a task in the collection, or -1."""
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return -1

    def contains(self, task_id: str) -> bool:
        return self.index_of(task_id) >= 0

    def ids(self) -> set[str]:
        """IDs currently on the board."""
        return {task.id for task in self._tasks}

    def _set(self, tasks: Iterable[Task]) -> None:
        new_tasks = [task.model_copy(deep=True) for task in tasks]
        seen: set[str] = set()
        for task in new_tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id: {task.id}")
            seen.add(task.id)
        self._tasks = new_tasks
