"""Service for creating and editing tasks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..models import Task, TaskDraft, TaskStatus
from ..utils import now_ms
from .normalizer import normalize_one

if TYPE_CHECKING:
    from .board_state import BoardState
    from .sync_service import SyncCoordinator

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task create/edit operations."""

    def __init__(
        self,
        board: BoardState,
        sync: SyncCoordinator | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.board = board
        self._sync = sync
        self._clock = clock

    def submit(self, draft: TaskDraft) -> Task | None:
        """
        Apply a form submission.

        A draft without an ID creates a task; a draft with an ID edits
        that task. Returns None if the draft is rejected (empty title) or
        the task to edit no longer exists.
        """
        if draft.id:
            return self.update_task(
                draft.id,
                title=draft.title,
                description=draft.description,
                status=draft.status,
            )
        return self.create_task(draft.title, draft.description, draft.status)

    def create_task(
        self,
        title: str,
        description: str = "",
        status: str = TaskStatus.TODO.value,
    ) -> Task | None:
        """
        Create a new task at the end of the board.

        The generated ID never collides with an ID already on the board.
        """
        now = self._clock()
        task = normalize_one(
            {
                "title": title,
                "description": description.strip(),
                "status": status,
                "createdAt": now,
                "updatedAt": now,
            },
            taken=self.board.ids(),
        )
        if task is None:
            logger.debug("create_task: rejected draft with empty title")
            return None

        tasks = self.board.get_snapshot()
        tasks.append(task)
        self.board.replace_all(tasks)
        self._persist()

        logger.info("Task created: %s (status=%s)", task.id, task.status)
        return task

    def update_task(
        self,
        task_id: str,
        title: str,
        description: str = "",
        status: str = TaskStatus.TODO.value,
    ) -> Task | None:
        """
        Edit an existing task in place.

        Keeps the ID, creation time and position; refreshes updated_at.
        """
        tasks = self.board.get_snapshot()
        index = next((i for i, t in enumerate(tasks) if t.id == task_id), -1)
        if index < 0:
            logger.debug("update_task: task not found: %s", task_id)
            return None

        record = tasks[index].to_record()
        record.update(
            title=title,
            description=description.strip(),
            status=status,
            updatedAt=self._clock(),
        )
        task = normalize_one(record)
        if task is None:
            logger.debug("update_task: rejected draft with empty title for %s", task_id)
            return None

        tasks[index] = task
        self.board.replace_all(tasks)
        self._persist()

        logger.info("Task edited: %s", task_id)
        return task

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        return self.board.get(task_id)

    def get_all_tasks(self) -> list[Task]:
        """Get all tasks in board order."""
        return self.board.get_snapshot()

    def _persist(self) -> None:
        if self._sync:
            self._sync.schedule_persist()
