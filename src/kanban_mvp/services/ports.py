"""Collaborator contracts between the core services and the UI."""

from __future__ import annotations

from typing import Protocol

from ..models import Notice, NoticeKind


class Notifier(Protocol):
    """Receives non-fatal notices (toasts in the TUI, lines on the CLI)."""

    def notify(self, notice: Notice) -> None: ...


class Confirmer(Protocol):
    """Asks the user a yes/no question."""

    async def __call__(self, message: str) -> bool: ...


class NoticeLog:
    """Notifier that records every notice it receives."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    def of_kind(self, kind: NoticeKind) -> list[Notice]:
        """Get recorded notices of one kind."""
        return [n for n in self.notices if n.kind == kind]

    def clear(self) -> None:
        self.notices.clear()


async def always_confirm(message: str) -> bool:  # noqa: ARG001
    return True


async def never_confirm(message: str) -> bool:  # noqa: ARG001
    return False
