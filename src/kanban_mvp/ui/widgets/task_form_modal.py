"""Create/edit task form."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select, Static

from ...models import BoardConfig, Task, TaskDraft, TaskStatus


class TaskFormModal(ModalScreen[TaskDraft | None]):
    """Form returning a TaskDraft, or None when cancelled.

    Without a task the form creates; with a task it edits that task.
    """

    DEFAULT_CSS = """
    TaskFormModal {
        align: center middle;
    }

    TaskFormModal > Vertical {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    TaskFormModal .form-title {
        text-style: bold;
        margin-bottom: 1;
    }

    TaskFormModal #form-error {
        color: $error;
        height: auto;
    }

    TaskFormModal .buttons {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }

    TaskFormModal Button {
        margin-left: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        board_config: BoardConfig,
        task_data: Task | None = None,
        default_status: str = TaskStatus.TODO.value,
    ) -> None:
        super().__init__()
        self._board_config = board_config
        self._task_data = task_data
        self._default_status = task_data.status if task_data else default_status

    @property
    def is_edit(self) -> bool:
        return self._task_data is not None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Edit task" if self.is_edit else "New task", classes="form-title")
            yield Label("Title")
            yield Input(
                value=self._task_data.title if self._task_data else "",
                placeholder="What needs to be done?",
                id="title",
            )
            yield Label("Description")
            yield Input(
                value=self._task_data.description if self._task_data else "",
                placeholder="Optional",
                id="description",
            )
            yield Label("Status")
            yield Select(
                [(col.title, col.id) for col in self._board_config.columns],
                value=self._default_status,
                allow_blank=False,
                id="status",
            )
            yield Static("", id="form-error")
            with Horizontal(classes="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#title", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.action_save()
        else:
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.action_save()

    def action_save(self) -> None:
        title = self.query_one("#title", Input).value.strip()
        if not title:
            self.query_one("#form-error", Static).update("Title is required.")
            self.query_one("#title", Input).focus()
            return

        status = self.query_one("#status", Select).value
        self.dismiss(
            TaskDraft(
                id=self._task_data.id if self._task_data else None,
                title=title,
                description=self.query_one("#description", Input).value,
                status=status if isinstance(status, str) else self._default_status,
            )
        )

    def action_cancel(self) -> None:
        self.dismiss(None)
