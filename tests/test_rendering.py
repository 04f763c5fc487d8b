from __future__ import annotations

import io
from datetime import datetime

from rich.console import Console

from tablebook.data import (
    MENU_ITEM_BY_ID,
    MENU_ITEMS,
    checkout_status_label,
    format_clock,
    format_price,
    menu_item_label,
)
from tablebook.models import Reservation
from tablebook.rendering import (
    build_reservation_table,
    format_menu,
    format_ordered_items,
    format_pending_selection,
    format_seats,
)


def _render(renderable) -> str:
    console = Console(file=io.StringIO(), width=140, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def _reservation(**overrides) -> Reservation:
    values = dict(
        reservation_id=1,
        name="Alice",
        phone="111-1111",
        guest_count=4,
        check_in_time=datetime(2024, 5, 1, 18, 5, 9),
    )
    values.update(overrides)
    return Reservation(**values)


def test_catalog_is_seeded_with_five_items():
    assert [(i.item_id, i.name, i.price) for i in MENU_ITEMS] == [
        (1, "Burger", 10),
        (2, "Pizza", 12),
        (3, "Pasta", 8),
        (4, "Salad", 5),
        (5, "Soda", 2),
    ]
    assert MENU_ITEM_BY_ID[4].name == "Salad"


def test_format_price():
    assert format_price(10) == "$10"
    assert format_price(2.0) == "$2"
    assert format_price(2.5) == "$2.50"


def test_menu_item_label():
    assert menu_item_label(MENU_ITEMS[0]) == "Burger - $10"


def test_format_clock():
    assert format_clock(datetime(2024, 5, 1, 9, 3, 7)) == "09:03:07"
    assert format_clock(None) == ""


def test_checkout_status_label():
    active = _reservation()
    done = _reservation(checked_out=True, check_out_time=datetime(2024, 5, 1, 19, 30, 0))

    assert checkout_status_label(active) == "Not Checked Out"
    assert checkout_status_label(done) == "Checked Out at 19:30:00"


def test_format_seats():
    assert format_seats(16, 20).plain == "Seats Left: 16 / 20"


def test_format_ordered_items():
    assert format_ordered_items(MENU_ITEMS[:2]) == "Burger, Pizza"
    assert format_ordered_items(()) == ""


def test_reservation_table_has_columns_and_rows():
    rows = [
        _reservation(ordered_items=tuple(MENU_ITEMS[:2])),
        _reservation(
            reservation_id=2,
            name="Bob",
            phone="222",
            checked_out=True,
            check_out_time=datetime(2024, 5, 1, 20, 0, 0),
        ),
    ]

    output = _render(build_reservation_table(rows, selected_index=1))

    for header in ("Name", "Phone", "Check-in Time", "Checkout Status", "Order"):
        assert header in output
    assert "Alice" in output
    assert "18:05:09" in output
    assert "Not Checked Out" in output
    assert "Checked Out at 20:00:00" in output
    assert "Burger, Pizza" in output
    bob_line = next(line for line in output.splitlines() if "Bob" in line)
    assert "➤" in bob_line


def test_format_menu_marks_cursor():
    text = format_menu(MENU_ITEMS, selected_index=1)
    lines = text.plain.splitlines()

    assert len(lines) == 5
    assert lines[0] == "  Burger - $10"
    assert lines[1] == "➤ Pizza - $12"


def test_format_menu_without_cursor():
    assert "➤" not in format_menu(MENU_ITEMS, selected_index=None).plain


def test_format_pending_selection():
    assert format_pending_selection([]).plain == "Selected Items:\n(none)"
    burger = MENU_ITEMS[0]
    assert format_pending_selection([burger, burger]).plain == (
        "Selected Items:\n• Burger - $10\n• Burger - $10"
    )
