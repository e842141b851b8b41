"""Service layer for board state, persistence and transfer."""

from .board_service import BoardService
from .board_state import BoardState
from .config_service import ConfigService
from .normalizer import extract_tasks_source, normalize_many, normalize_one
from .ports import Confirmer, NoticeLog, Notifier, always_confirm, never_confirm
from .store_service import STORAGE_KEY, StoreService
from .sync_service import PendingDeletion, SyncCoordinator
from .task_service import TaskService
from .transfer_service import EXPORT_FILENAME, TransferService, read_document

__all__ = [
    "EXPORT_FILENAME",
    "STORAGE_KEY",
    "BoardService",
    "BoardState",
    "ConfigService",
    "Confirmer",
    "NoticeLog",
    "Notifier",
    "PendingDeletion",
    "StoreService",
    "SyncCoordinator",
    "TaskService",
    "TransferService",
    "always_confirm",
    "extract_tasks_source",
    "never_confirm",
    "normalize_many",
    "normalize_one",
    "read_document",
]
