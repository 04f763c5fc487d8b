"""Static menu data and display helpers."""

from __future__ import annotations

from datetime import datetime

from tablebook.config import CLOCK_FORMAT
from tablebook.constant import MENU_ITEM_DATA, NOT_CHECKED_OUT_LABEL
from tablebook.models import MenuItem, Reservation

MENU_ITEMS: tuple[MenuItem, ...] = tuple(
    MenuItem(item_id=int(raw["item_id"]), name=str(raw["name"]), price=raw["price"])  # type: ignore[arg-type]
    for raw in MENU_ITEM_DATA
)

MENU_ITEM_BY_ID: dict[int, MenuItem] = {item.item_id: item for item in MENU_ITEMS}


def format_price(price: int | float) -> str:
    """Render a price as `$10` or `$2.50`."""
    if float(price).is_integer():
        return f"${int(price)}"
    return f"${price:.2f}"


def menu_item_label(item: MenuItem) -> str:
    return f"{item.name} - {format_price(item.price)}"


def format_clock(moment: datetime | None) -> str:
    if moment is None:
        return ""
    return moment.strftime(CLOCK_FORMAT)


def checkout_status_label(reservation: Reservation) -> str:
    """Return the checkout column text for a reservation row."""
    if reservation.checked_out:
        return f"Checked Out at {format_clock(reservation.check_out_time)}"
    return NOT_CHECKED_OUT_LABEL
