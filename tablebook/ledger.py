"""In-memory reservation ledger: seats, reservations, pending order and search."""

from __future__ import annotations

from datetime import datetime
from itertools import count
from typing import Callable, Iterable

from tablebook.config import TOTAL_SEATS
from tablebook.data import MENU_ITEMS
from tablebook.errors import (
    AlreadyCheckedOutError,
    DuplicateNameError,
    InsufficientSeatsError,
    InvalidReservationError,
    MenuItemNotFoundError,
    ReservationNotFoundError,
)
from tablebook.models import MenuItem, Reservation


def filter_reservations(reservations: Iterable[Reservation], query: str) -> list[Reservation]:
    """Return reservations whose name (case-insensitive) or phone contains `query`."""
    if not query:
        return list(reservations)
    lowered = query.lower()
    return [r for r in reservations if lowered in r.name.lower() or query in r.phone]


class ReservationLedger:
    """Owns all reservation state for one session.

    Seat accounting keeps `seats_left == total_seats - seats_in_use` after every
    operation. Failed operations raise a `ReservationError` subclass and leave
    the ledger untouched.
    """

    def __init__(
        self,
        total_seats: int = TOTAL_SEATS,
        menu_items: Iterable[MenuItem] = MENU_ITEMS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if total_seats < 1:
            raise ValueError("total_seats must be at least 1")
        self.total_seats = total_seats
        self.seats_left = total_seats
        self.menu_items: tuple[MenuItem, ...] = tuple(menu_items)
        self.reservations: list[Reservation] = []
        self.pending_selection: list[MenuItem] = []
        self.search_query = ""
        self._clock = clock
        self._ids = count(1)

    @property
    def seats_in_use(self) -> int:
        return sum(r.guest_count for r in self.reservations if r.is_active)

    def active_reservations(self) -> list[Reservation]:
        return [r for r in self.reservations if r.is_active]

    def get(self, reservation_id: int) -> Reservation:
        for reservation in self.reservations:
            if reservation.reservation_id == reservation_id:
                return reservation
        raise ReservationNotFoundError(reservation_id)

    def menu_item(self, item_id: int) -> MenuItem:
        for item in self.menu_items:
            if item.item_id == item_id:
                return item
        raise MenuItemNotFoundError(item_id)

    def submit_reservation(self, name: str, phone: str, guest_count: int) -> Reservation:
        """Seat a new party and attach the pending menu selection to it."""
        if not name:
            raise InvalidReservationError("name is required")
        if not phone:
            raise InvalidReservationError("phone is required")
        if isinstance(guest_count, bool) or not isinstance(guest_count, int) or guest_count < 1:
            raise InvalidReservationError("guest_count must be a positive integer")

        if any(r.name == name for r in self.reservations):
            raise DuplicateNameError(name)
        if guest_count > self.seats_left:
            raise InsufficientSeatsError(guest_count, self.seats_left)

        reservation = Reservation(
            reservation_id=next(self._ids),
            name=name,
            phone=phone,
            guest_count=guest_count,
            check_in_time=self._clock(),
            ordered_items=tuple(self.pending_selection),
        )
        self.reservations.append(reservation)
        self.seats_left -= guest_count
        self.pending_selection.clear()
        return reservation

    def checkout(self, reservation_id: int) -> Reservation:
        """Mark a reservation checked out and free its seats."""
        reservation = self.get(reservation_id)
        if reservation.checked_out:
            raise AlreadyCheckedOutError(reservation_id)

        reservation.check_out_time = self._clock()
        reservation.checked_out = True
        self.seats_left += reservation.guest_count
        return reservation

    def delete_reservation(self, reservation_id: int) -> Reservation:
        """Remove a reservation, returning its seats first if it is still active."""
        reservation = self.get(reservation_id)
        if reservation.is_active:
            self.seats_left += reservation.guest_count
        self.reservations.remove(reservation)
        return reservation

    def select_menu_item(self, item: MenuItem | int) -> MenuItem:
        if not isinstance(item, MenuItem):
            item = self.menu_item(item)
        self.pending_selection.append(item)
        return item

    def clear_pending_selection(self) -> None:
        self.pending_selection.clear()

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def filtered_reservations(self) -> list[Reservation]:
        return filter_reservations(self.reservations, self.search_query)
