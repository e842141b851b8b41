"""Task domain model."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    """The three fixed board stages, in board order."""

    TODO = "todo"
    IN_PROGRESS = "inprogress"
    DONE = "done"


class MoveDirection(str, Enum):
    """Direction of a move between neighbouring columns."""

    LEFT = "left"
    RIGHT = "right"


STATUS_ORDER: tuple[TaskStatus, ...] = (
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.DONE,
)
ALLOWED_STATUSES = frozenset(status.value for status in STATUS_ORDER)


class Task(BaseModel):
    """A single validated task.

    Instances are only built by the normalizer, so every field already
    satisfies the board rules. Serialized field names use the camelCase
    wire spelling (``createdAt``, ``updatedAt``).
    """

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    created_at: int = Field(..., alias="createdAt")  # epoch milliseconds
    updated_at: int = Field(..., alias="updatedAt")

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
    }

    def to_record(self) -> dict:
        """Convert to the plain dict written to storage and export files."""
        return self.model_dump(by_alias=True)


@dataclass
class TaskDraft:
    """A create/edit form submission. ``id`` is None when creating."""

    title: str
    description: str = ""
    status: str = TaskStatus.TODO.value
    id: str | None = None
