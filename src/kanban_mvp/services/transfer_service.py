"""JSON import and export of the whole board."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic_core import PydanticSerializationError

from ..errors import ImportEmptyError, ImportParseError
from ..models import ExportDocument, Notice, NoticeKind, Task
from ..utils import now_ms
from .normalizer import extract_tasks_source, normalize_many

if TYPE_CHECKING:
    from ..models.notice import Severity
    from .board_state import BoardState
    from .ports import Confirmer, Notifier
    from .sync_service import SyncCoordinator

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "kanban-tasks.json"


def read_document(text: str) -> list[Task]:
    """
    Parse an import document into validated tasks.

    Raises:
        ImportParseError: If the text is not valid JSON or nests too deeply.
        ImportEmptyError: If no valid task could be extracted.
    """
    try:
        document: Any = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ImportParseError(f"Invalid JSON: {e}") from e

    tasks = normalize_many(extract_tasks_source(document))
    if not tasks:
        raise ImportEmptyError("No valid tasks in document")
    return tasks


class TransferService:
    """
    Gateway for exporting the board to JSON and importing it back.

    Export never changes the board. Import replaces the whole board (it
    does not merge) and only after the user confirms.
    """

    def __init__(
        self,
        board: BoardState,
        sync: SyncCoordinator | None = None,
        notifier: Notifier | None = None,
        confirm: Confirmer | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            board: The authoritative board state
            sync: Coordinator used to persist an imported board
            notifier: Receives export/import notices
            confirm: Asked before an import replaces the board; None
                imports without asking
            clock: Source of the exportedAt timestamp
        """
        self.board = board
        self._sync = sync
        self._notifier = notifier
        self._confirm = confirm
        self._clock = clock

    # --- Export ---

    def export_document(self) -> ExportDocument:
        """Build the export envelope for the current board."""
        return ExportDocument(
            exported_at=self._clock(),
            tasks=normalize_many(self.board.get_snapshot()),
        )

    def export_text(self) -> str:
        """Serialize the current board as an export document."""
        return self.export_document().to_json()

    def export_to(self, path: Path) -> Path | None:
        """
        Write the export document to a file.

        If `path` is an existing directory, kanban-tasks.json is written
        inside it.

        Returns:
            The written path, or None if the file could not be written.
        """
        if path.is_dir():
            path = path / EXPORT_FILENAME

        document = self.export_document()
        try:
            text = document.to_json() + "\n"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except (OSError, PydanticSerializationError) as e:
            logger.warning("Export to %s failed: %s", path, e)
            self._report(NoticeKind.WRITE_FAILURE, f"Could not export to {path}.", "error")
            return None

        logger.info("Exported %d tasks to %s", len(document.tasks), path)
        self._report(NoticeKind.EXPORTED, f"Exported {len(document.tasks)} tasks to {path}.")
        return path

    # --- Import ---

    async def import_text(self, text: str) -> bool:
        """
        Replace the board with the tasks of an import document.

        Returns:
            True if the board was replaced.
        """
        try:
            tasks = read_document(text)
        except ImportParseError as e:
            logger.warning("Import aborted: %s", e)
            self._report(NoticeKind.IMPORT_PARSE_FAILURE, "Invalid JSON file.", "error")
            return False
        except ImportEmptyError as e:
            logger.warning("Import aborted: %s", e)
            self._report(NoticeKind.IMPORT_EMPTY_FAILURE, "No valid tasks in file.", "error")
            return False

        if self._confirm is not None and not await self._confirm(
            f"Import {len(tasks)} tasks and replace the current board?"
        ):
            logger.debug("Import declined")
            return False

        if self._sync:
            self._sync.discard_pending()
        self.board.replace_all(tasks)
        if self._sync:
            await self._sync.persist()

        logger.info("Imported %d tasks", len(tasks))
        self._report(NoticeKind.IMPORTED, f"Imported {len(tasks)} tasks.")
        return True

    async def import_file(self, path: Path) -> bool:
        """Read an import document from disk and import it."""
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read import file %s: %s", path, e)
            self._report(NoticeKind.IMPORT_PARSE_FAILURE, f"Could not read {path}.", "error")
            return False
        return await self.import_text(text)

    def _report(
        self, kind: NoticeKind, message: str, severity: Severity = "information"
    ) -> None:
        if self._notifier:
            self._notifier.notify(Notice(kind=kind, message=message, severity=severity))
