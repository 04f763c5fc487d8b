"""Domain errors raised by the reservation ledger.

Every error is raised before any state is touched, so callers can surface the
message and carry on.
"""

from __future__ import annotations


class ReservationError(Exception):
    """Base class for recoverable ledger errors."""


class InvalidReservationError(ReservationError, ValueError):
    """A required reservation field is missing or out of range."""


class DuplicateNameError(ReservationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"reservation with name {name!r} already exists")
        self.name = name


class InsufficientSeatsError(ReservationError):
    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"requested {requested} seats but only {available} left")
        self.requested = requested
        self.available = available


class AlreadyCheckedOutError(ReservationError):
    def __init__(self, reservation_id: int) -> None:
        super().__init__(f"reservation {reservation_id} is already checked out")
        self.reservation_id = reservation_id


class ReservationNotFoundError(ReservationError, LookupError):
    def __init__(self, reservation_id: int) -> None:
        super().__init__(f"no reservation with id {reservation_id}")
        self.reservation_id = reservation_id


class MenuItemNotFoundError(ReservationError, LookupError):
    def __init__(self, item_id: int) -> None:
        super().__init__(f"no menu item with id {item_id}")
        self.item_id = item_id
