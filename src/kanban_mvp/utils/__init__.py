"""Utility functions."""

from .datetime import now_ms, to_iso
from .ids import generate_task_id, to_base36

__all__ = [
    "generate_task_id",
    "now_ms",
    "to_base36",
    "to_iso",
]
