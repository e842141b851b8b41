"""Board view model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .kanban_config import BoardConfig
from .task import STATUS_ORDER, Task, TaskStatus


class Board(BaseModel):
    """Tasks grouped by status for rendering.

    Grouping keeps the relative order the tasks have in the board state.
    """

    columns: dict[str, list[Task]] = Field(default_factory=dict)

    @classmethod
    def from_tasks(cls, tasks: list[Task]) -> Board:
        """Create Board from tasks, grouping by status."""
        board = cls(columns={status.value: [] for status in STATUS_ORDER})
        for task in tasks:
            board.columns[task.status].append(task)
        return board

    def get_column(self, status: str) -> list[Task]:
        """Get tasks for a specific column."""
        return self.columns.get(status, [])

    def get_visible_columns(
        self, config: BoardConfig | None = None
    ) -> list[tuple[str, str, list[Task]]]:
        """
        Get columns with their configured titles.

        Returns:
            List of (status, title, tasks) tuples in display order.
        """
        if config is None:
            config = BoardConfig.default()

        return [(col.id, col.title, self.get_column(col.id)) for col in config.columns]

    def counts(self) -> dict[str, int]:
        """Number of tasks per status."""
        return {status: len(tasks) for status, tasks in self.columns.items()}

    @property
    def todo(self) -> list[Task]:
        return self.get_column(TaskStatus.TODO.value)

    @property
    def in_progress(self) -> list[Task]:
        return self.get_column(TaskStatus.IN_PROGRESS.value)

    @property
    def done(self) -> list[Task]:
        return self.get_column(TaskStatus.DONE.value)
