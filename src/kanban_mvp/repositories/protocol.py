"""Protocol for durable key-value slots."""

from typing import Protocol


class SlotProtocol(Protocol):
    """Interface for a durable key-value store holding text documents.

    The store adapter keeps the whole board in a single versioned key
    (e.g. "kanban_mvp:v1"). Implementations include:
    - Filesystem (one file per key under a data directory)
    - Memory (process lifetime only)
    """

    def read(self, key: str) -> str | None:
        """Read the value stored under a key.

        Returns:
            The stored text, or None if the key has never been written.

        Raises:
            StoreReadError: If the underlying medium cannot be read.
        """
        ...

    def write(self, key: str, value: str) -> None:
        """Replace the value stored under a key.

        Raises:
            StoreWriteError: If the underlying medium cannot be written
                (quota exceeded, permissions, storage disabled).
        """
        ...
