"""Construction of the core services in their fixed dependency order."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..repositories import FilesystemSlot, MemorySlot, SlotProtocol
from ..services import (
    BoardService,
    BoardState,
    ConfigService,
    Confirmer,
    Notifier,
    StoreService,
    SyncCoordinator,
    TaskService,
    TransferService,
)


@dataclass
class Core:
    """The wired core of one running board."""

    config_service: ConfigService
    slot: SlotProtocol
    store: StoreService
    board: BoardState
    sync: SyncCoordinator
    task_service: TaskService
    board_service: BoardService
    transfer_service: TransferService


def build_core(
    settings: Settings,
    notifier: Notifier | None = None,
    confirm: Confirmer | None = None,
) -> Core:
    """
    Build the services for a board.

    Order: config -> slot -> store -> board state -> coordinator -> task,
    board and transfer services. Each component receives the ones it
    depends on directly.
    """
    config_service = ConfigService(settings.data_dir)
    config = config_service.get_config()

    slot: SlotProtocol = MemorySlot() if settings.ephemeral else FilesystemSlot(settings.data_dir)
    store = StoreService(slot, notifier)
    board = BoardState()
    sync = SyncCoordinator(
        board,
        store,
        notifier=notifier,
        confirm=confirm,
        undo_timeout=config.undo_timeout,
    )

    return Core(
        config_service=config_service,
        slot=slot,
        store=store,
        board=board,
        sync=sync,
        task_service=TaskService(board, sync),
        board_service=BoardService(board, sync, config_service),
        transfer_service=TransferService(board, sync, notifier=notifier, confirm=confirm),
    )
