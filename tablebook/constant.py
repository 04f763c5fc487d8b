"""Editable static menu and message configuration."""

from __future__ import annotations

# Canonical menu values consumed by tablebook.data (which wraps these into MenuItem instances).
MENU_ITEM_DATA: list[dict[str, int | str]] = [
    {"item_id": 1, "name": "Burger", "price": 10},
    {"item_id": 2, "name": "Pizza", "price": 12},
    {"item_id": 3, "name": "Pasta", "price": 8},
    {"item_id": 4, "name": "Salad", "price": 5},
    {"item_id": 5, "name": "Soda", "price": 2},
]

DUPLICATE_NAME_MESSAGE = "Reservation with this name already exists!"
INSUFFICIENT_SEATS_MESSAGE = "Not enough seats available!"
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this reservation?"
FINISH_MESSAGE = "Reservation System Finished!"

NOT_CHECKED_OUT_LABEL = "Not Checked Out"
