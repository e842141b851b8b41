"""Widget components."""

from .column import EmptyColumnMessage, KanbanColumn
from .confirm_modal import ConfirmModal
from .path_prompt_modal import PathPromptModal
from .task_card import TaskCard
from .task_form_modal import TaskFormModal
from .task_preview_modal import TaskPreviewModal

__all__ = [
    "ConfirmModal",
    "EmptyColumnMessage",
    "KanbanColumn",
    "PathPromptModal",
    "TaskCard",
    "TaskFormModal",
    "TaskPreviewModal",
]
