"""kanban_mvp TUI Application."""

import asyncio
from pathlib import Path

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from .cli.bootstrap import build_core
from .config import Settings
from .models import Notice, NoticeKind, Task, TaskDraft
from .ui.screens.board import BoardScreen
from .ui.screens.help import HelpScreen
from .ui.widgets import ConfirmModal, PathPromptModal, TaskFormModal, TaskPreviewModal


class AppNotifier:
    """Shows core notices as Textual notifications."""

    DEFAULT_TIMEOUT = 3.0

    def __init__(self, app: "KanbanApp") -> None:
        self.app = app

    def notify(self, notice: Notice) -> None:
        message = notice.message
        timeout = self.DEFAULT_TIMEOUT
        if notice.kind == NoticeKind.DELETED:
            message = f"{message} Press u to undo."
            timeout = self.app.sync.undo_timeout
        self.app.notify(message, severity=notice.severity, timeout=timeout)


class KanbanApp(App):
    """kanban_mvp - single-board terminal Kanban."""

    TITLE = "kanban-mvp"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        # Navigation - vim style
        Binding("h", "nav_left", "← Column", show=False),
        Binding("j", "nav_down", "↓ Task", show=False),
        Binding("k", "nav_up", "↑ Task", show=False),
        Binding("l", "nav_right", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "nav_left", "← Column", show=False),
        Binding("down", "nav_down", "↓ Task", show=False),
        Binding("up", "nav_up", "↑ Task", show=False),
        Binding("right", "nav_right", "→ Column", show=False),
        # Jump navigation
        Binding("g", "nav_first", "First", show=False),
        Binding("G", "nav_last", "Last", show=False),
        # Task actions
        Binding("n", "new_task", "New", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("enter", "preview_task", "Preview", show=False),
        Binding("H", "move_task_left", "Move ←", show=False),
        Binding("L", "move_task_right", "Move →", show=False),
        Binding("shift+left", "move_task_left", "Move ←", show=False),
        Binding("shift+right", "move_task_right", "Move →", show=False),
        Binding("d", "delete_task", "Delete", show=True),
        Binding("u", "undo_delete", "Undo", show=True),
        # Import / export
        Binding("x", "export", "Export", show=True),
        Binding("i", "import", "Import", show=True),
        Binding("escape", "escape", "Back", show=False),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Build the core services in dependency order."""
        self.app_notifier = AppNotifier(self)
        core = build_core(self.settings, notifier=self.app_notifier, confirm=self.confirm)
        self.config_service = core.config_service
        self.board = core.board
        self.sync = core.sync
        self.task_service = core.task_service
        self.board_service = core.board_service
        self.transfer_service = core.transfer_service
        self.board_screen = BoardScreen()

    def on_mount(self) -> None:
        """Show the board, then load the saved tasks into it."""
        self.board.subscribe(self._on_board_changed)
        self.push_screen(self.board_screen)
        self.run_worker(self._startup(), exclusive=False)

    async def _startup(self) -> None:
        if notice := self.config_service.error_notice():
            self.app_notifier.notify(notice)
        await self.sync.start()

    def _on_board_changed(self, tasks: list[Task]) -> None:  # noqa: ARG002
        """Render trigger registered with the board state."""
        if self.board_screen.is_mounted:
            self.board_screen.refresh_board()

    async def confirm(self, message: str) -> bool:
        """Ask a yes/no question in a modal. Must run inside a worker."""
        answer: asyncio.Future[bool | None] = asyncio.get_running_loop().create_future()

        def resolve(result: bool | None) -> None:
            if not answer.done():
                answer.set_result(result)

        self.push_screen(ConfirmModal(message), callback=resolve)
        return bool(await answer)

    async def action_quit(self) -> None:
        """Finish pending writes before exiting."""
        await self.sync.close()
        self.exit()

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    def _board_screen(self) -> BoardScreen | None:
        screen = self.screen
        if isinstance(screen, BoardScreen):
            return screen
        return None

    # Navigation actions
    def action_nav_left(self) -> None:
        if screen := self._board_screen():
            screen.navigate_column(-1)

    def action_nav_right(self) -> None:
        if screen := self._board_screen():
            screen.navigate_column(1)

    def action_nav_up(self) -> None:
        if screen := self._board_screen():
            screen.navigate_task(-1)

    def action_nav_down(self) -> None:
        if screen := self._board_screen():
            screen.navigate_task(1)

    def action_nav_first(self) -> None:
        if screen := self._board_screen():
            screen.navigate_to_task(0)

    def action_nav_last(self) -> None:
        if screen := self._board_screen():
            screen.navigate_to_task(-1)

    # Task actions
    def action_new_task(self) -> None:
        """Open the form to create a task in the current column."""
        screen = self._board_screen()
        if screen is None:
            return

        self.push_screen(
            TaskFormModal(
                self.board_service.get_board_config(),
                default_status=screen.current_column_status,
            ),
            callback=self._handle_form_result,
        )

    def action_edit_task(self) -> None:
        """Open the form to edit the current task."""
        screen = self._board_screen()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        self.push_screen(
            TaskFormModal(self.board_service.get_board_config(), task_data=task),
            callback=self._handle_form_result,
        )

    def _handle_form_result(self, draft: TaskDraft | None) -> None:
        """Apply a submitted create/edit form."""
        if draft is None:
            return

        task = self.task_service.submit(draft)
        if task is None:
            self.notify("Task not saved", severity="warning", timeout=2)
            return

        # The board state re-renders on change; focus follows the task
        self.board_screen.request_focus(task.id)
        self.notify("Task updated" if draft.id else "Task created", timeout=2)

    def action_preview_task(self) -> None:
        """Show task preview modal."""
        screen = self._board_screen()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        self.push_screen(TaskPreviewModal(task), callback=self._handle_preview_result)

    def _handle_preview_result(self, edit_requested: bool | None) -> None:
        if edit_requested:
            self.action_edit_task()

    def _move_current_task(self, right: bool) -> None:
        screen = self._board_screen()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        screen.request_focus(task.id)
        if right:
            result = self.board_service.move_task_right(task.id)
        else:
            result = self.board_service.move_task_left(task.id)

        if result and result.status != task.status:
            title = self.board_service.get_board_config().title_for(result.status)
            self.notify(f"Moved to {title}", timeout=2)

    def action_move_task_left(self) -> None:
        """Move current task to previous column."""
        self._move_current_task(right=False)

    def action_move_task_right(self) -> None:
        """Move current task to next column."""
        self._move_current_task(right=True)

    def action_delete_task(self) -> None:
        """Delete the current task (with confirmation and undo)."""
        screen = self._board_screen()
        if screen is None:
            return

        task = screen.get_current_task()
        if task is None:
            return

        self.run_worker(self.sync.delete(task.id), exclusive=False)

    def action_undo_delete(self) -> None:
        """Restore the most recently deleted task."""
        if not self.sync.can_undo:
            self.notify("Nothing to undo", severity="warning", timeout=2)
            return

        pending = self.sync.pending
        if pending is not None:
            self.board_screen.request_focus(pending.task.id)
        self.run_worker(self.sync.undo(), exclusive=False)

    # Import / export actions
    def action_export(self) -> None:
        """Export the board to a JSON file."""
        self.push_screen(
            PathPromptModal("Export tasks to:", self.settings.export_path),
            callback=self._handle_export_path,
        )

    def _handle_export_path(self, path: Path | None) -> None:
        if path is not None:
            self.transfer_service.export_to(path)

    def action_import(self) -> None:
        """Import a JSON file, replacing the board."""
        self.push_screen(
            PathPromptModal("Import tasks from:", self.settings.export_path),
            callback=self._handle_import_path,
        )

    def _handle_import_path(self, path: Path | None) -> None:
        if path is not None:
            self.run_worker(self.transfer_service.import_file(path), exclusive=False)

    def action_escape(self) -> None:
        """Dismiss the topmost modal."""
        screen = self.screen
        if isinstance(screen, ModalScreen):
            screen.dismiss(None)


def run(settings: Settings | None = None) -> None:
    """Run the kanban_mvp application."""
    app = KanbanApp(settings)
    app.run()
