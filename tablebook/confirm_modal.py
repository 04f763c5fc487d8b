"""Yes/no confirmation modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class ConfirmModal(ModalScreen[bool]):
    """Ask a yes/no question; dismisses with True only on `y`."""

    CSS = """
    ConfirmModal {
        align: center middle;
        background: $background 60%;
    }

    #confirm-dialog {
        width: 56;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #confirm-prompt {
        color: white;
        margin-bottom: 1;
    }

    #confirm-help {
        color: #dddddd;
    }
    """

    def __init__(self, prompt: str) -> None:
        super().__init__()
        self.prompt = prompt

    def compose(self) -> ComposeResult:
        with Container(id="confirm-dialog"):
            yield Static(self.prompt, id="confirm-prompt")
            yield Static("y confirm. n/Esc cancel.", id="confirm-help")

    def on_key(self, event: Key) -> None:
        if event.character in {"y", "Y"}:
            self.dismiss(True)
        elif event.key in {"escape", "n", "N", "q", "ctrl+c"}:
            self.dismiss(False)
        event.stop()
