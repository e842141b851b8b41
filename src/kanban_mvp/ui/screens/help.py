"""Help screen showing keyboard shortcuts."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("h / l / ← / →", "Previous / next column"),
            ("j / k / ↓ / ↑", "Next / previous task"),
            ("g / G", "First / last task"),
        ],
    ),
    (
        "Tasks",
        [
            ("n", "New task"),
            ("e", "Edit task"),
            ("enter", "Preview task"),
            ("H / L", "Move task left / right"),
            ("d", "Delete task"),
            ("u", "Undo last delete"),
        ],
    ),
    (
        "Board",
        [
            ("x", "Export to JSON"),
            ("i", "Import from JSON (replaces board)"),
            ("?", "This help"),
            ("q", "Quit"),
        ],
    ),
]


class HelpScreen(ModalScreen):
    """Modal help screen showing keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 60;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    HelpScreen .help-title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
    }

    HelpScreen .section-title {
        text-style: bold;
        color: $primary;
        padding-top: 1;
    }

    HelpScreen .help-row {
        height: 1;
    }

    HelpScreen .help-key {
        width: 18;
        text-style: bold;
    }

    HelpScreen .help-desc {
        width: 1fr;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("?", "dismiss", "Close", show=False),
        Binding("q", "dismiss", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Keyboard Shortcuts", classes="help-title")
            for title, rows in SECTIONS:
                yield Static(title, classes="section-title")
                for key, desc in rows:
                    with Horizontal(classes="help-row"):
                        yield Static(key, classes="help-key")
                        yield Static(desc, classes="help-desc")
