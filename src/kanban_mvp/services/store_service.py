"""Persistence of the board to a durable key-value slot."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic_core import PydanticSerializationError

from ..errors import StoreReadError, StoreWriteError
from ..models import STORAGE_VERSION, Notice, NoticeKind, StoredPayload, Task
from ..utils import now_ms
from .normalizer import extract_tasks_source, normalize_many

if TYPE_CHECKING:
    from ..repositories import SlotProtocol
    from .ports import Notifier

logger = logging.getLogger(__name__)

STORAGE_KEY = f"kanban_mvp:v{STORAGE_VERSION}"


class StoreService:
    """
    Loads and saves the versioned board payload.

    Storage problems never propagate: an unreadable or corrupt slot loads
    as an empty board, and a failed write leaves the in-memory board as
    the authority. Both are reported through the notifier.
    """

    READ_FAILURE_MESSAGE = "Could not read saved tasks; starting with an empty board."
    WRITE_FAILURE_MESSAGE = "Could not save tasks; changes are kept in memory only."

    def __init__(
        self,
        slot: SlotProtocol,
        notifier: Notifier | None = None,
        key: str = STORAGE_KEY,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.slot = slot
        self.key = key
        self._notifier = notifier
        self._clock = clock

    def load(self) -> list[Task]:
        """Read, validate and return the stored tasks (empty on any failure)."""
        try:
            raw = self.slot.read(self.key)
        except StoreReadError as e:
            logger.warning("Store read failed: %s", e)
            self._report(NoticeKind.READ_FAILURE, self.READ_FAILURE_MESSAGE)
            return []

        if not raw:
            logger.debug("Store slot %s is empty", self.key)
            return []

        try:
            document: Any = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Store slot %s holds invalid JSON: %s", self.key, e)
            self._report(NoticeKind.READ_FAILURE, self.READ_FAILURE_MESSAGE)
            return []

        source = extract_tasks_source(document)
        if source is None:
            logger.warning(
                "Store slot %s holds an unexpected document (%s)",
                self.key,
                type(document).__name__,
            )
            self._report(NoticeKind.READ_FAILURE, self.READ_FAILURE_MESSAGE)
            return []

        tasks = normalize_many(source)
        logger.info("Loaded %d tasks from %s", len(tasks), self.key)
        return tasks

    def save(self, tasks: list[Task] | list[Any]) -> bool:
        """
        Normalize and write tasks inside a fresh envelope.

        Returns:
            True if the write succeeded.
        """
        payload = StoredPayload(saved_at=self._clock(), tasks=normalize_many(tasks))
        try:
            text = payload.to_json()
            self.slot.write(self.key, text)
        except (StoreWriteError, PydanticSerializationError) as e:
            logger.warning("Store write failed: %s", e)
            self._report(NoticeKind.WRITE_FAILURE, self.WRITE_FAILURE_MESSAGE)
            return False

        logger.debug("Saved %d tasks to %s", len(payload.tasks), self.key)
        return True

    def _report(self, kind: NoticeKind, message: str) -> None:
        if self._notifier:
            self._notifier.notify(Notice(kind=kind, message=message, severity="error"))
