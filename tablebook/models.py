"""Domain models for tablebook."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry that can be added to an order."""

    item_id: int
    name: str
    price: int | float


@dataclass
class Reservation:
    """A seated party with its check-in/out times and ordered items."""

    reservation_id: int
    name: str
    phone: str
    guest_count: int
    check_in_time: datetime
    check_out_time: datetime | None = None
    checked_out: bool = False
    ordered_items: tuple[MenuItem, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return not self.checked_out
