"""Main Textual app class."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from rich.console import Group
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from tablebook.config import DEBUG_LOG_PATH
from tablebook.confirm_modal import ConfirmModal
from tablebook.constant import (
    DELETE_CONFIRM_MESSAGE,
    DUPLICATE_NAME_MESSAGE,
    FINISH_MESSAGE,
    INSUFFICIENT_SEATS_MESSAGE,
)
from tablebook.errors import (
    AlreadyCheckedOutError,
    DuplicateNameError,
    InsufficientSeatsError,
    ReservationError,
)
from tablebook.ledger import ReservationLedger
from tablebook.models import Reservation
from tablebook.rendering import (
    build_reservation_table,
    format_menu,
    format_pending_selection,
    format_seats,
)
from tablebook.reservation_form_modal import ReservationFormModal

# Header plus separator rows drawn by the reservation table.
_TABLE_CHROME_ROWS = 2


class ReservationApp(App):
    """A Textual app for seating parties, taking their order and checking them out."""

    TITLE = "Restaurant Reservation System"
    SUB_TITLE = "Seats / Orders"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #reservations-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #seats-info {
        margin-bottom: 1;
    }

    #alert {
        color: #ffb3b3;
        height: auto;
    }

    #reservations-table {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #menu-list {
        height: auto;
        border: tall $surface;
        padding: 0 1;
        margin-bottom: 1;
    }

    #pending-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    menu_index = reactive(0)
    row_selected_index = reactive(None)

    BINDINGS = [
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "confirm_active", "Add item / Done"),
        ("backspace", "backspace_query", "Delete query char"),
        ("ctrl+u", "clear_search", "Clear search"),
        ("ctrl+c", "cancel_active_mode", "Exit active mode"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, ledger: ReservationLedger | None = None) -> None:
        super().__init__()
        self.ledger = ledger if ledger is not None else ReservationLedger()
        self.duplicate_name_alert = False
        self.system_status = ""
        self._debug_log_path = Path(DEBUG_LOG_PATH) if DEBUG_LOG_PATH else None
        self._log_debug("app_init")

    def _log_debug(self, message: str) -> None:
        if self._debug_log_path is None:
            return
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self._debug_log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._debug_log_path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except OSError:
            # Logging must never interfere with app flow.
            return

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="reservations-pane"):
                yield Static("Reservations", classes="pane-title")
                yield Static(id="seats-info")
                yield Static(id="alert")
                yield Static("(no reservations yet)", id="reservations-table")
            with Vertical(id="side-pane"):
                yield Static(id="search-bar")
                yield Static("Menu", classes="pane-title")
                yield Static(id="menu-list")
                yield Static(id="pending-list")

    def on_mount(self) -> None:
        self._log_debug(f"on_mount seats={self.ledger.seats_left}/{self.ledger.total_seats}")
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if isinstance(self.screen, ModalScreen):
            return

        self._log_debug(
            f"on_key key={event.key!r} char={event.character!r} printable={event.is_printable} state={self.input_state!r}"
        )

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        if self.input_state == "search":
            self.ledger.set_search_query(self.ledger.search_query + event.character)
            self._refresh_all()
            event.stop()
            return

        key = event.character.lower()
        if self.input_state == "menu":
            if key == "j":
                self.action_move_cursor(1)
            elif key == "k":
                self.action_move_cursor(-1)
            elif key == "m":
                self.action_cancel_active_mode()
            event.stop()
            return

        if key == "n":
            self._open_reservation_form()
        elif key == "s":
            self.input_state = "search"
            self._refresh_search_bar()
        elif key == "m":
            self.input_state = "menu"
            self.menu_index = 0
            self._refresh_menu()
            self._refresh_search_bar()
        elif key == "j":
            self._move_row_selection(1)
        elif key == "k":
            self._move_row_selection(-1)
        elif key == "c":
            self._checkout_selected()
        elif key == "d":
            self._confirm_delete_selected()
        elif key == "x":
            self.ledger.clear_pending_selection()
            self.system_status = "Order cleared"
            self._refresh_all()
        elif key == "f":
            self._finish()
        else:
            return
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self._refresh_all()

    def action_move_cursor(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "menu":
            items = self.ledger.menu_items
            if not items:
                return
            self.menu_index = (self.menu_index + delta) % len(items)
            self._refresh_menu()
            return
        if self.input_state == "normal":
            self._move_row_selection(delta)

    def action_confirm_active(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "search":
            self.input_state = "normal"
            self._refresh_all()
            return
        if self.input_state != "menu":
            return

        items = self.ledger.menu_items
        if not items:
            return
        item = self.ledger.select_menu_item(items[self.menu_index])
        self._log_debug(f"menu_select item_id={item.item_id} pending={len(self.ledger.pending_selection)}")
        self._refresh_pending()

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "search":
            return

        query = self.ledger.search_query
        if not query:
            return
        self.ledger.set_search_query(query[:-1])
        self._refresh_all()

    def action_clear_search(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        self.ledger.set_search_query("")
        self._refresh_all()

    def _open_reservation_form(self) -> None:
        self.push_screen(
            ReservationFormModal(self.ledger.seats_left, on_submit=self._submit_reservation),
            self._on_form_closed,
        )

    def _submit_reservation(self, name: str, phone: str, guest_count: int) -> str | None:
        try:
            reservation = self.ledger.submit_reservation(name, phone, guest_count)
        except DuplicateNameError:
            self.duplicate_name_alert = True
            self._log_debug(f"submit_blocked reason=duplicate_name name={name!r}")
            return DUPLICATE_NAME_MESSAGE
        except InsufficientSeatsError as exc:
            self._log_debug(f"submit_blocked reason=insufficient_seats requested={exc.requested} available={exc.available}")
            return INSUFFICIENT_SEATS_MESSAGE
        except ReservationError as exc:
            self._log_debug(f"submit_blocked reason=invalid error={exc!r}")
            return str(exc)

        self.duplicate_name_alert = False
        self.system_status = f"Reserved {reservation.guest_count} seat(s) for {reservation.name}"
        self._select_reservation(reservation.reservation_id)
        self._log_debug(
            f"submit_saved id={reservation.reservation_id} guests={reservation.guest_count} "
            f"items={len(reservation.ordered_items)} seats_left={self.ledger.seats_left}"
        )
        return None

    def _on_form_closed(self, submitted: bool | None) -> None:
        if not submitted:
            self._log_debug("form_cancelled")
        self._refresh_all()

    def _checkout_selected(self) -> None:
        reservation = self._selected_reservation()
        if reservation is None:
            return
        try:
            self.ledger.checkout(reservation.reservation_id)
        except AlreadyCheckedOutError:
            self.system_status = f"{reservation.name} is already checked out"
            self._refresh_search_bar()
            return
        except ReservationError as exc:
            self.system_status = str(exc)
            self._refresh_search_bar()
            return

        self.system_status = f"Checked out {reservation.name}"
        self._log_debug(f"checkout id={reservation.reservation_id} seats_left={self.ledger.seats_left}")
        self._refresh_all()

    def _confirm_delete_selected(self) -> None:
        reservation = self._selected_reservation()
        if reservation is None:
            return
        reservation_id = reservation.reservation_id

        def on_answer(confirmed: bool | None) -> None:
            if confirmed:
                self._delete_reservation(reservation_id)
            else:
                self._log_debug(f"delete_cancelled id={reservation_id}")
            self._refresh_all()

        self.push_screen(ConfirmModal(DELETE_CONFIRM_MESSAGE), on_answer)

    def _delete_reservation(self, reservation_id: int) -> None:
        try:
            removed = self.ledger.delete_reservation(reservation_id)
        except ReservationError as exc:
            self.system_status = str(exc)
            return
        self.system_status = f"Deleted reservation for {removed.name}"
        self._log_debug(f"delete id={reservation_id} seats_left={self.ledger.seats_left}")

    def _finish(self) -> None:
        self.system_status = FINISH_MESSAGE
        self._log_debug("finish")
        self._refresh_search_bar()

    def _visible_reservations(self) -> list[Reservation]:
        return self.ledger.filtered_reservations()

    def _select_reservation(self, reservation_id: int) -> None:
        for idx, reservation in enumerate(self._visible_reservations()):
            if reservation.reservation_id == reservation_id:
                self.row_selected_index = idx
                return

    def _move_row_selection(self, delta: int) -> None:
        rows = self._visible_reservations()
        if not rows:
            return

        if self.row_selected_index is None:
            self.row_selected_index = 0 if delta > 0 else len(rows) - 1
        else:
            self.row_selected_index = (self.row_selected_index + delta) % len(rows)
        self._refresh_reservations()

    def _selected_reservation(self) -> Reservation | None:
        if self.row_selected_index is None:
            return None
        rows = self._visible_reservations()
        if not (0 <= self.row_selected_index < len(rows)):
            return None
        return rows[self.row_selected_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height - _TABLE_CHROME_ROWS
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        self._refresh_reservations()
        self._refresh_menu()
        self._refresh_pending()
        self._refresh_search_bar()

    def _refresh_reservations(self) -> None:
        try:
            seats_widget = self.query_one("#seats-info", Static)
            alert_widget = self.query_one("#alert", Static)
            table_widget = self.query_one("#reservations-table", Static)
        except NoMatches:
            return

        seats_widget.update(format_seats(self.ledger.seats_left, self.ledger.total_seats))
        alert_widget.update(DUPLICATE_NAME_MESSAGE if self.duplicate_name_alert else "")

        rows = self._visible_reservations()
        if not rows:
            self.row_selected_index = None
            if self.ledger.reservations:
                table_widget.update("No matching reservations")
            else:
                table_widget.update("(no reservations yet)")
            return

        if self.row_selected_index is not None and self.row_selected_index >= len(rows):
            self.row_selected_index = len(rows) - 1

        start, end = self._window_bounds(len(rows), self._visible_rows(table_widget), self.row_selected_index)
        selected = None if self.row_selected_index is None else self.row_selected_index - start
        parts: list[object] = []
        if start > 0:
            parts.append(Text("⋮", style="dim"))
        parts.append(build_reservation_table(rows[start:end], selected))
        if end < len(rows):
            parts.append(Text("⋮", style="dim"))
        table_widget.update(Group(*parts))

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        cursor = self.menu_index if self.input_state == "menu" else None
        menu_widget.update(format_menu(self.ledger.menu_items, cursor))

    def _refresh_pending(self) -> None:
        try:
            pending_widget = self.query_one("#pending-list", Static)
        except NoMatches:
            return
        pending_widget.update(format_pending_selection(self.ledger.pending_selection))

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return

        if self.input_state == "search":
            text = Text()
            text.append("Search", style="bold #ffffff on #2f6db5")
            text.append(f": {self.ledger.search_query}|")
            text.append("\nType to filter by name or phone. Enter/Ctrl+C done, Ctrl+U clear.", style="dim")
            bar.update(text)
            return

        if self.input_state == "menu":
            text = Text()
            text.append("Menu", style="bold #0b1f0f on #5fbf72")
            text.append(" ↑/↓ or J/K move, Enter add to order, M or Ctrl+C done")
            bar.update(text)
            return

        text = Text()
        if self.ledger.search_query:
            text.append(f"Filter: {self.ledger.search_query}  ", style="bold")
        text.append("N reserve  S search  M menu  C checkout  D delete  X clear order  F finish")
        text.append(f"\n{self.system_status or 'Ready'}", style="dim")
        bar.update(text)
