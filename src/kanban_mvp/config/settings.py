"""Application settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    data_dir: Path = Field(
        default=Path(".kanban"),
        description="Directory holding the saved board and kanban.yml",
    )

    export_path: Path = Field(
        default=Path("kanban-tasks.json"),
        description="Default file for export and import",
    )

    ephemeral: bool = Field(
        default=False,
        description="Keep the board in memory only, never touching the disk",
    )

    verbose: int = Field(
        default=0,
        description="Verbosity level (0=off, 1=INFO, 2+=DEBUG)",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional path to write logs to file",
    )

    model_config = {
        "env_prefix": "KANBAN_MVP_",
    }
