"""Data models."""

from .board import Board
from .kanban_config import BoardConfig, ColumnConfig, KanbanConfig
from .notice import Notice, NoticeKind
from .payload import STORAGE_VERSION, ExportDocument, StoredPayload
from .task import (
    ALLOWED_STATUSES,
    STATUS_ORDER,
    MoveDirection,
    Task,
    TaskDraft,
    TaskStatus,
)

__all__ = [
    "ALLOWED_STATUSES",
    "STATUS_ORDER",
    "STORAGE_VERSION",
    "Board",
    "BoardConfig",
    "ColumnConfig",
    "ExportDocument",
    "KanbanConfig",
    "MoveDirection",
    "Notice",
    "NoticeKind",
    "StoredPayload",
    "Task",
    "TaskDraft",
    "TaskStatus",
]
