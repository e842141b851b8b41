"""Headless export and import commands."""

import asyncio
import logging
from pathlib import Path

from ..config import Settings
from ..services import always_confirm
from .bootstrap import build_core
from .output import ConsoleNotifier, ask_yes_no, error, info

logger = logging.getLogger(__name__)


async def _export(settings: Settings, path: Path) -> int:
    notifier = ConsoleNotifier()
    core = build_core(settings, notifier)
    if notice := core.config_service.error_notice():
        notifier.notify(notice)
    try:
        await core.sync.start()
        if len(core.board) == 0:
            info("Board is empty; exporting an empty task list")
        written = core.transfer_service.export_to(path)
    finally:
        await core.sync.close()
    return 0 if written is not None else 1


async def _import(settings: Settings, path: Path, assume_yes: bool) -> int:
    confirm = always_confirm if assume_yes else ask_yes_no
    notifier = ConsoleNotifier()
    core = build_core(settings, notifier, confirm)
    if notice := core.config_service.error_notice():
        notifier.notify(notice)
    try:
        await core.sync.start()
        imported = await core.transfer_service.import_file(path)
    finally:
        await core.sync.close()
    return 0 if imported else 1


def run_export(settings: Settings, path: Path) -> int:
    """
    Export the saved board to a JSON file.

    Returns:
        Exit code (0 = success, 1 = write failed)
    """
    return asyncio.run(_export(settings, path))


def run_import(settings: Settings, path: Path, assume_yes: bool = False) -> int:
    """
    Replace the saved board with the tasks of a JSON file.

    Without `assume_yes` the user is asked to confirm; non-interactive
    input declines.

    Returns:
        Exit code (0 = imported, 1 = aborted)
    """
    if not path.exists():
        error(f"File not found: {path}")
        return 1
    return asyncio.run(_import(settings, path, assume_yes))
