"""Repository layer for durable storage."""

from .filesystem import FilesystemSlot
from .memory import MemorySlot
from .protocol import SlotProtocol

__all__ = [
    "FilesystemSlot",
    "MemorySlot",
    "SlotProtocol",
]
