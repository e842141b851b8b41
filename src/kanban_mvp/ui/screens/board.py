"""Main kanban board screen."""

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header

from ...models import BoardConfig, Task
from ..widgets.column import KanbanColumn


class BoardScreen(Screen):
    """Kanban board with one column per status and keyboard navigation."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._current_column = 0
        self._current_task = 0
        # Task to focus once the next refresh has rebuilt the columns
        self._pending_focus_id: str | None = None

    @property
    def board_config(self) -> BoardConfig:
        """Get board configuration from app."""
        return self.app.board_service.get_board_config()

    @property
    def column_ids(self) -> list[str]:
        """Column statuses in display order."""
        return [col.id for col in self.board_config.columns]

    @property
    def column_count(self) -> int:
        return len(self.column_ids)

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="board-container"), Horizontal(id="columns"):
            for col in self.board_config.columns:
                yield KanbanColumn(title=col.title, status=col.id, id=f"column-{col.id}")
        yield Footer()

    def on_mount(self) -> None:
        """Load tasks when screen mounts."""
        self.load_tasks()
        self.call_after_refresh(self._update_focus)

    def load_tasks(self) -> None:
        """Populate columns from the current board state."""
        board = self.app.board_service.load_board()
        for status, _title, tasks in board.get_visible_columns(self.board_config):
            try:
                column = self.query_one(f"#column-{status}", KanbanColumn)
                column.set_tasks(tasks)
            except Exception as e:
                self.log.error(f"Failed to load column {status}: {e}")

    def request_focus(self, task_id: str) -> None:
        """Focus this task after the next refresh."""
        self._pending_focus_id = task_id

    def refresh_board(self) -> None:
        """Re-render all columns and restore focus."""
        self.load_tasks()
        # Double-defer so the columns finish rebuilding first
        self.call_after_refresh(lambda: self.call_after_refresh(self._apply_pending_focus))

    def _find_task_position(self, task_id: str) -> tuple[int, int] | None:
        """Find a task's (column_index, task_index)."""
        for col_idx in range(self.column_count):
            column = self._get_column(col_idx)
            if column is None:
                continue
            task_idx = column.index_of(task_id)
            if task_idx >= 0:
                return (col_idx, task_idx)
        return None

    def _apply_pending_focus(self) -> None:
        """Apply pending focus after refresh completes."""
        task_id, self._pending_focus_id = self._pending_focus_id, None
        if task_id:
            position = self._find_task_position(task_id)
            if position:
                self._current_column, self._current_task = position
                self._update_focus()
                return

        # Fallback: previous position clamped to the column length
        column = self._get_column(self._current_column)
        if column and column.task_count > 0:
            self._current_task = min(self._current_task, column.task_count - 1)
        else:
            self._current_task = 0
        self._update_focus()

    def navigate_column(self, delta: int) -> None:
        """Navigate between columns."""
        new_column = max(0, min(self._current_column + delta, self.column_count - 1))
        if new_column != self._current_column:
            self._current_column = new_column
            column = self._get_column(new_column)
            if column and column.task_count > 0:
                self._current_task = min(self._current_task, column.task_count - 1)
            else:
                self._current_task = 0
            self._update_focus()

    def navigate_task(self, delta: int) -> None:
        """Navigate between tasks in current column."""
        column = self._get_column(self._current_column)
        if column is None or column.task_count == 0:
            return

        new_task = max(0, min(self._current_task + delta, column.task_count - 1))
        if new_task != self._current_task:
            self._current_task = new_task
            self._update_focus()

    def navigate_to_task(self, index: int) -> None:
        """Navigate to specific task index (-1 for last)."""
        column = self._get_column(self._current_column)
        if column is None or column.task_count == 0:
            return
        self._current_task = column.task_count - 1 if index < 0 else min(index, column.task_count - 1)
        self._update_focus()

    def _get_column(self, index: int) -> KanbanColumn | None:
        """Get column widget by index."""
        if index < 0 or index >= self.column_count:
            return None
        try:
            return self.query_one(f"#column-{self.column_ids[index]}", KanbanColumn)
        except Exception:
            return None

    def _update_focus(self) -> None:
        column = self._get_column(self._current_column)
        if column:
            column.focus_task(self._current_task)

    def get_current_task(self) -> Task | None:
        """Get the currently selected task."""
        column = self._get_column(self._current_column)
        if column:
            return column.get_task(self._current_task)
        return None

    @property
    def current_column_status(self) -> str:
        """Status of the selected column."""
        if 0 <= self._current_column < self.column_count:
            return self.column_ids[self._current_column]
        return self.column_ids[0]
