"""Colorful CLI output helpers."""

import sys

from ..models import Notice

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    """Apply color to text if terminal supports it."""
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    print(f"{_colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    print(f"{_colorize(BULLET, YELLOW)} {message}")


def error(message: str) -> None:
    """Print error message with red cross."""
    print(f"{_colorize(CROSS, RED)} {message}")


class ConsoleNotifier:
    """Notifier printing each notice as a line on stdout."""

    def notify(self, notice: Notice) -> None:
        if notice.is_failure:
            error(notice.message)
        elif notice.severity == "warning":
            info(notice.message)
        else:
            success(notice.message)


async def ask_yes_no(message: str) -> bool:
    """Confirmer reading y/N from stdin; non-interactive input declines."""
    if not sys.stdin.isatty():
        return False
    print(f"{message} [y/N]: ", end="", flush=True)
    return input().strip().lower() in ("y", "yes")
