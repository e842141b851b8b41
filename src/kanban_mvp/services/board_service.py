"""Service for moving tasks between columns."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..models import STATUS_ORDER, Board, BoardConfig, MoveDirection, Task, TaskStatus
from ..utils import now_ms

if TYPE_CHECKING:
    from .board_state import BoardState
    from .config_service import ConfigService
    from .sync_service import SyncCoordinator

logger = logging.getLogger(__name__)


class BoardService:
    """Service for board view and column moves."""

    def __init__(
        self,
        board: BoardState,
        sync: SyncCoordinator | None = None,
        config_service: ConfigService | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.board = board
        self._sync = sync
        self._config_service = config_service
        self._clock = clock

    def get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    def load_board(self) -> Board:
        """Get the current board with tasks grouped by status."""
        return Board.from_tasks(self.board.get_snapshot())

    def get_tasks_by_status(self, status: str) -> list[Task]:
        """Get all tasks in a specific status."""
        return [t for t in self.board.get_snapshot() if t.status == status]

    def move_task(self, task_id: str, direction: MoveDirection | str) -> Task | None:
        """
        Move a task one column left or right.

        Moves past the first or last column leave the task unchanged and
        are not persisted.

        Returns:
            The task after the move, or None if it does not exist.
        """
        direction = MoveDirection(direction)
        tasks = self.board.get_snapshot()
        index = next((i for i, t in enumerate(tasks) if t.id == task_id), -1)
        if index < 0:
            logger.debug("move_task: task not found: %s", task_id)
            return None

        task = tasks[index]
        new_status = self.neighbour_status(task.status, direction)
        if new_status == task.status:
            logger.debug("move_task: %s already at the %s edge", task_id, direction.value)
            return task

        moved = task.model_copy(update={"status": new_status, "updated_at": self._clock()})
        tasks[index] = moved
        self.board.replace_all(tasks)
        if self._sync:
            self._sync.schedule_persist()

        logger.info("Task moved: %s (%s -> %s)", task_id, task.status, new_status)
        return moved

    def move_task_left(self, task_id: str) -> Task | None:
        """Move task to the previous column (e.g., inprogress -> todo)."""
        return self.move_task(task_id, MoveDirection.LEFT)

    def move_task_right(self, task_id: str) -> Task | None:
        """Move task to the next column (e.g., todo -> inprogress)."""
        return self.move_task(task_id, MoveDirection.RIGHT)

    @staticmethod
    def neighbour_status(status: str, direction: MoveDirection) -> str:
        """Get the adjacent status, clamped to the board edges."""
        order = [s.value for s in STATUS_ORDER]
        try:
            idx = order.index(status)
        except ValueError:
            return TaskStatus.TODO.value
        idx += -1 if direction == MoveDirection.LEFT else 1
        if idx < 0 or idx >= len(order):
            return status
        return order[idx]
