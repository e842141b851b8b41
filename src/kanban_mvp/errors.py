"""Exception types for kanban_mvp."""


class KanbanError(Exception):
    """Base class for all kanban_mvp errors."""


class StoreError(KanbanError):
    """The durable store could not be used."""


class StoreReadError(StoreError):
    """The durable store slot could not be read."""


class StoreWriteError(StoreError):
    """The durable store slot could not be written (quota, permissions, disabled)."""


class TransferError(KanbanError):
    """An import document was rejected."""


class ImportParseError(TransferError):
    """The import document is not valid JSON."""


class ImportEmptyError(TransferError):
    """The import document contains no valid tasks."""
