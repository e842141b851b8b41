"""Utilities for generating task identifiers."""

import secrets
import string
from collections.abc import Container

from .datetime import now_ms

_ALPHABET = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    """
    Convert a non-negative integer to lowercase base 36.

    Example: 35 -> "z", 36 -> "10"
    """
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_task_id(taken: Container[str] = ()) -> str:
    """
    Generate a fresh task ID such as "t_loyw3v28_k3j9qa".

    Combines the current time with a random suffix and retries until the
    result is not in `taken`.
    """
    while True:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(6))
        task_id = f"t_{to_base36(now_ms())}_{suffix}"
        if task_id not in taken:
            return task_id
