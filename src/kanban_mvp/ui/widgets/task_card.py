"""Task card widget."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task, TaskStatus
from ...utils import to_iso


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a column."""

    def __init__(self, task_data: Task, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data

    @property
    def task(self) -> Task:
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        yield Static(escape(self._truncate(self._task_data.title, 40)), classes="task-title")

        preview = self._get_description_preview()
        if preview:
            yield Static(escape(preview), classes="task-preview")

        yield Static(self._format_meta(), classes="task-meta")

    def _format_meta(self) -> str:
        """Move hints and last update date."""
        left = "[dim]·[/]" if self._task_data.status == TaskStatus.TODO else "‹"
        right = "[dim]·[/]" if self._task_data.status == TaskStatus.DONE else "›"
        updated = to_iso(self._task_data.updated_at)[:10]
        return f"{left} {right}  [dim]{updated}[/]"

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _get_description_preview(self) -> str:
        """Get first non-empty line of the description."""
        for line in self._task_data.description.split("\n"):
            line = line.strip()
            if line:
                return self._truncate(line, 50)
        return ""
