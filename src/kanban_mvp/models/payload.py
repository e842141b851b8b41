"""Versioned envelopes for the durable store and export files."""

from pydantic import BaseModel, Field

from .task import Task

STORAGE_VERSION = 1


class StoredPayload(BaseModel):
    """Document written to the durable store slot."""

    v: int = STORAGE_VERSION
    saved_at: int = Field(..., alias="savedAt")
    tasks: list[Task] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        """Serialize with wire field names."""
        return self.model_dump_json(by_alias=True)


class ExportDocument(BaseModel):
    """Document offered for download by the export command."""

    v: int = STORAGE_VERSION
    exported_at: int = Field(..., alias="exportedAt")
    tasks: list[Task] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        """Serialize with wire field names, pretty-printed."""
        return self.model_dump_json(by_alias=True, indent=2)
