"""In-memory key-value slot."""


class MemorySlot:
    """Slot storage that lives only as long as the process.

    Used for ephemeral sessions where nothing should touch the disk.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self) -> None:
        """Forget all stored values."""
        self._values.clear()
