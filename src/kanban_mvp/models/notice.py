"""User-facing notices produced by the core services."""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

Severity = Literal["information", "warning", "error"]


class NoticeKind(str, Enum):
    """What a notice reports."""

    READ_FAILURE = "read_failure"
    WRITE_FAILURE = "write_failure"
    IMPORT_PARSE_FAILURE = "import_parse_failure"
    IMPORT_EMPTY_FAILURE = "import_empty_failure"
    CONFIG_ERROR = "config_error"
    RESTORED = "restored"
    DELETED = "deleted"
    UNDONE = "undone"
    EXPORTED = "exported"
    IMPORTED = "imported"


@dataclass(frozen=True)
class Notice:
    """A non-fatal message for the user."""

    kind: NoticeKind
    message: str
    severity: Severity = "information"
    action: str | None = None  # e.g. "Undo"

    @property
    def is_failure(self) -> bool:
        """Whether the notice reports a recovered failure."""
        return self.severity == "error"
