"""Reservation entry modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

SubmitHandler = Callable[[str, str, int], str | None]


class ReservationFormModal(ModalScreen[bool]):
    """Collect name, phone and guest count for a new reservation.

    `on_submit` is called with the parsed values and returns an error message,
    or None once the reservation is recorded. On error the form stays open with
    its values intact.
    """

    CSS = """
    ReservationFormModal {
        align: center middle;
        background: $background 60%;
    }

    #reservation-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #reservation-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #reservation-fields {
        color: white;
        margin-bottom: 1;
    }

    #reservation-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #reservation-help {
        color: #dddddd;
    }
    """

    FIELDS = ("name", "phone", "guests")
    LABELS = {"name": "Name", "phone": "Phone", "guests": "Guest Count"}
    _MAX_GUEST_DIGITS = 3

    def __init__(self, seats_left: int, on_submit: SubmitHandler) -> None:
        super().__init__()
        self.seats_left = seats_left
        self.on_submit = on_submit
        self.values = {field: "" for field in self.FIELDS}
        self.values["guests"] = "1"
        self.field_index = 0
        self.error = ""

    @property
    def current_field(self) -> str:
        return self.FIELDS[self.field_index]

    def compose(self) -> ComposeResult:
        with Container(id="reservation-dialog"):
            yield Static("Make a Reservation", id="reservation-title")
            yield Static(id="reservation-fields")
            yield Static(id="reservation-error")
            yield Static(
                "Tab/Shift+Tab switch field. Enter reserve. Backspace delete. Esc cancel.",
                id="reservation-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(False)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key in {"tab", "down"}:
            self.field_index = (self.field_index + 1) % len(self.FIELDS)
            self._refresh_content()
            event.stop()
            return

        if event.key in {"shift+tab", "up"}:
            self.field_index = (self.field_index - 1) % len(self.FIELDS)
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            value = self.values[self.current_field]
            if value:
                self.values[self.current_field] = value[:-1]
                self.error = ""
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if self.current_field == "guests":
                if not event.character.isdigit():
                    event.stop()
                    return
                if len(self.values["guests"]) >= self._MAX_GUEST_DIGITS:
                    event.stop()
                    return
            self.values[self.current_field] += event.character
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        # Swallow navigation keys so main-screen bindings stay inactive.
        event.stop()

    def _confirm(self) -> None:
        name = self.values["name"]
        phone = self.values["phone"]
        if not name:
            self._show_error("Name is required.", field="name")
            return
        if not phone:
            self._show_error("Phone is required.", field="phone")
            return
        if not self.values["guests"]:
            self._show_error("Guest count is required.", field="guests")
            return
        if self.seats_left < 1:
            self._show_error("No seats available.", field="guests")
            return

        guests = int(self.values["guests"])
        if not (1 <= guests <= self.seats_left):
            self._show_error(f"Guest count must be between 1 and {self.seats_left}.", field="guests")
            return

        error = self.on_submit(name, phone, guests)
        if error:
            self._show_error(error)
            return
        self.dismiss(True)

    def _show_error(self, message: str, field: str | None = None) -> None:
        self.error = message
        if field is not None:
            self.field_index = self.FIELDS.index(field)
        self._refresh_content()

    def _refresh_content(self) -> None:
        fields_widget = self.query_one("#reservation-fields", Static)
        error_widget = self.query_one("#reservation-error", Static)

        content = Text(style="white")
        for idx, field in enumerate(self.FIELDS):
            if idx > 0:
                content.append("\n")
            active = idx == self.field_index
            pointer = "➤ " if active else "  "
            content.append(f"{pointer}{self.LABELS[field]}: ", style="bold white" if active else "white")
            content.append(self.values[field])
            if active:
                content.append("|", style="bold white")
        content.append(f"\n\n  Seats available: {self.seats_left}", style="#dddddd")

        fields_widget.update(content)
        error_widget.update(self.error or "")
