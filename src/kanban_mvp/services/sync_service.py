"""Synchronization between the board state and the durable store."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..models import Notice, NoticeKind, Task

if TYPE_CHECKING:
    from .board_state import BoardState
    from .ports import Confirmer, Notifier
    from .store_service import StoreService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingDeletion:
    """A removed task that can still be restored."""

    task: Task
    index: int  # position in the collection before removal


class SyncCoordinator:
    """
    Mirrors the board state into the store and owns delete/undo.

    Every mutation enqueues a snapshot on a FIFO queue that a single worker
    task writes to the store, so writes land in the order the actions
    happened without blocking the event that caused them.

    At most one deletion is undoable at a time. A new deletion replaces the
    pending one; when the undo timer elapses the pending record is dropped
    (the removal was already persisted).

    All methods must be called from the running event loop.
    """

    DEFAULT_UNDO_TIMEOUT = 5.0

    def __init__(
        self,
        board: BoardState,
        store: StoreService,
        notifier: Notifier | None = None,
        confirm: Confirmer | None = None,
        undo_timeout: float = DEFAULT_UNDO_TIMEOUT,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            board: The authoritative board state
            store: Store adapter used for every load and save
            notifier: Receives restore/delete/undo notices
            confirm: Asked before deleting; None deletes without asking
            undo_timeout: Seconds a deleted task stays restorable
        """
        self.board = board
        self.store = store
        self.undo_timeout = undo_timeout
        self._notifier = notifier
        self._confirm = confirm
        self._queue: asyncio.Queue[list[Task]] = asyncio.Queue()
        self._worker: asyncio.Task | None = None
        self._pending: PendingDeletion | None = None
        self._undo_handle: asyncio.TimerHandle | None = None
        self._started = False

    @property
    def pending(self) -> PendingDeletion | None:
        """The deletion that can currently be undone, if any."""
        return self._pending

    @property
    def can_undo(self) -> bool:
        return self._pending is not None

    # --- Lifecycle ---

    async def start(self) -> list[Task]:
        """
        Reconcile the board with the store once the board is ready.

        A non-empty stored collection replaces the board wholesale;
        otherwise the board keeps its initial state.

        Returns:
            The tasks that were restored (empty if none).
        """
        if self._started:
            return []
        self._started = True
        self._ensure_worker()

        tasks = await self.load()
        if tasks:
            self.board.replace_all(tasks)
            logger.info("Restored %d tasks from storage", len(tasks))
            self._report(
                NoticeKind.RESTORED,
                f"Restored {len(tasks)} saved task{'s' if len(tasks) != 1 else ''}.",
            )
        return tasks

    async def close(self) -> None:
        """Expire any pending undo, finish queued writes and stop the worker."""
        self.discard_pending()
        await self.flush()
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None

    # --- Persistence ---

    def schedule_persist(self) -> None:
        """Queue a write of the current board; returns immediately."""
        self._queue.put_nowait(self.board.get_snapshot())
        self._ensure_worker()

    async def flush(self) -> None:
        """Wait until every queued write has been applied."""
        if not self._queue.empty():
            self._ensure_worker()
        await self._queue.join()

    async def persist(self) -> None:
        """Queue a write of the current board and wait for it."""
        self.schedule_persist()
        await self.flush()

    async def load(self) -> list[Task]:
        """Load from the store after all queued writes have landed."""
        await self.flush()
        return self.store.load()

    def _ensure_worker(self) -> None:
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(
                self._drain(), name="kanban-persist"
            )

    async def _drain(self) -> None:
        while True:
            tasks = await self._queue.get()
            try:
                self.store.save(tasks)
            except Exception:
                logger.exception("Unexpected error while persisting %d tasks", len(tasks))
            finally:
                self._queue.task_done()

    # --- Delete / Undo ---

    async def delete(self, task_id: str) -> bool:
        """
        Remove a task after confirmation and make it undoable.

        Returns:
            True if the task was removed.
        """
        task = self.board.get(task_id)
        if task is None:
            logger.debug("delete: task not found: %s", task_id)
            return False

        if self._confirm is not None and not await self._confirm(f"Delete '{task.title}'?"):
            logger.debug("delete: declined for %s", task_id)
            return False

        snapshot = self.board.get_snapshot()
        index = next((i for i, t in enumerate(snapshot) if t.id == task_id), -1)
        if index < 0:
            # Removed while the confirmation was open
            return False
        removed = snapshot.pop(index)

        self._cancel_undo_timer()
        pending = PendingDeletion(task=removed, index=index)
        self._pending = pending

        self.board.replace_all(snapshot)
        self.schedule_persist()
        self._undo_handle = asyncio.get_running_loop().call_later(
            self.undo_timeout, self._expire, pending
        )

        logger.info("Task deleted: %s (undo for %.1fs)", task_id, self.undo_timeout)
        self._report(NoticeKind.DELETED, "Task deleted.", action="Undo")
        await self.flush()
        return True

    async def undo(self) -> bool:
        """
        Restore the pending deletion at its former position.

        Returns:
            True if a task was restored.
        """
        pending = self._pending
        if pending is None:
            logger.debug("undo: nothing to restore")
            return False
        self.discard_pending()

        if self.board.contains(pending.task.id):
            logger.debug("undo: task already on board: %s", pending.task.id)
            return False

        snapshot = self.board.get_snapshot()
        snapshot.insert(min(pending.index, len(snapshot)), pending.task)
        self.board.replace_all(snapshot)
        self.schedule_persist()

        logger.info("Task restored: %s", pending.task.id)
        self._report(NoticeKind.UNDONE, "Task restored.")
        await self.flush()
        return True

    def discard_pending(self) -> None:
        """Forget the pending deletion, making it permanent."""
        self._cancel_undo_timer()
        self._pending = None

    def _expire(self, pending: PendingDeletion) -> None:
        if self._pending is pending:
            logger.debug("Undo window expired for %s", pending.task.id)
            self._pending = None
            self._undo_handle = None

    def _cancel_undo_timer(self) -> None:
        if self._undo_handle is not None:
            self._undo_handle.cancel()
            self._undo_handle = None

    def _report(self, kind: NoticeKind, message: str, action: str | None = None) -> None:
        if self._notifier:
            self._notifier.notify(Notice(kind=kind, message=message, action=action))
