"""Configuration models for kanban.yml."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .task import STATUS_ORDER, TaskStatus

DEFAULT_TITLES: dict[str, str] = {
    TaskStatus.TODO.value: "To do",
    TaskStatus.IN_PROGRESS.value: "In progress",
    TaskStatus.DONE.value: "Done",
}


class ColumnConfig(BaseModel):
    """Display configuration for one status column."""

    id: TaskStatus
    title: str = Field(..., min_length=1)

    model_config = {"use_enum_values": True}


class BoardConfig(BaseModel):
    """Column configuration. The status set and its order are fixed."""

    columns: list[ColumnConfig] = Field(
        default_factory=lambda: [
            ColumnConfig(id=status, title=DEFAULT_TITLES[status.value])
            for status in STATUS_ORDER
        ]
    )

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnConfig]) -> list[ColumnConfig]:
        """Require exactly todo, inprogress, done in that order."""
        expected = [status.value for status in STATUS_ORDER]
        actual = [col.id for col in v]
        if actual != expected:
            raise ValueError(
                f"Columns must be exactly {', '.join(expected)} in that order "
                f"(got {', '.join(actual) or 'none'})"
            )
        return v

    @classmethod
    def default(cls) -> BoardConfig:
        """Create the default three-column configuration."""
        return cls()

    def get_column(self, status: str) -> ColumnConfig | None:
        """Get column config by status."""
        for col in self.columns:
            if col.id == status:
                return col
        return None

    def title_for(self, status: str) -> str:
        """Get the display title of a status."""
        col = self.get_column(status)
        return col.title if col else status


class KanbanConfig(BaseModel):
    """Root configuration model for kanban.yml."""

    version: int = 1
    board: BoardConfig = Field(default_factory=BoardConfig)
    undo_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds a deleted task can be restored",
    )

    @classmethod
    def default(cls) -> KanbanConfig:
        """Create default configuration."""
        return cls()
