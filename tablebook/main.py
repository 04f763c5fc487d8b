"""Entry point for the tablebook Textual app."""

from __future__ import annotations

from tablebook.ledger import ReservationLedger
from tablebook.reservation_app import ReservationApp


def main() -> None:
    """Run the Textual application with a fresh in-memory ledger."""
    ReservationApp(ReservationLedger()).run()


if __name__ == "__main__":
    main()
