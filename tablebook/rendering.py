"""Rendering helpers turning ledger state into rich renderables."""

from __future__ import annotations

from typing import Sequence

from rich.table import Table
from rich.text import Text

from tablebook.data import checkout_status_label, format_clock, menu_item_label
from tablebook.models import MenuItem, Reservation


def status_style(reservation: Reservation) -> str:
    """Return a consistent style for the checkout column."""
    if reservation.checked_out:
        return "dim"
    return "bold #5fbf72"


def format_seats(seats_left: int, total_seats: int) -> Text:
    text = Text()
    text.append("Seats Left: ", style="bold")
    style = "bold #b23a48" if seats_left == 0 else "bold #5fbf72"
    text.append(f"{seats_left}", style=style)
    text.append(f" / {total_seats}")
    return text


def format_ordered_items(items: Sequence[MenuItem]) -> str:
    return ", ".join(item.name for item in items)


def build_reservation_table(reservations: Sequence[Reservation], selected_index: int | None) -> Table:
    """Build the reservation table with a pointer on the selected row."""
    table = Table(expand=True, show_edge=False, pad_edge=False)
    table.add_column("", width=2, no_wrap=True)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Name")
    table.add_column("Phone")
    table.add_column("Check-in Time", no_wrap=True)
    table.add_column("Checkout Status")
    table.add_column("Order")

    for idx, reservation in enumerate(reservations):
        pointer = "➤" if idx == selected_index else ""
        table.add_row(
            pointer,
            str(reservation.reservation_id),
            reservation.name,
            reservation.phone,
            Text(format_clock(reservation.check_in_time), style="green"),
            Text(checkout_status_label(reservation), style=status_style(reservation)),
            format_ordered_items(reservation.ordered_items),
        )
    return table


def format_menu(items: Sequence[MenuItem], selected_index: int | None) -> Text:
    """Render the catalog, highlighting the cursor row while picking."""
    lines = Text()
    for idx, item in enumerate(items):
        if idx > 0:
            lines.append("\n")
        pointer = "➤ " if idx == selected_index else "  "
        style = "bold" if idx == selected_index else ""
        lines.append(f"{pointer}{menu_item_label(item)}", style=style)
    return lines


def format_pending_selection(items: Sequence[MenuItem]) -> Text:
    text = Text()
    text.append("Selected Items:", style="bold")
    if not items:
        text.append("\n(none)", style="dim")
        return text
    for item in items:
        text.append(f"\n• {menu_item_label(item)}")
    return text
