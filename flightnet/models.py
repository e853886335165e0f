"""Domain models for the flight network: airports, flight legs and statuses."""
from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

HIGH_OCCUPANCY = 0.90
LOW_OCCUPANCY = 0.10
HIGH_OCCUPANCY_MULTIPLIER = 2.0
LOW_OCCUPANCY_MULTIPLIER = 0.5

# Global acquisition order for seat locks; multi-leg bookings lock in this order.
_lock_order = itertools.count()


def price_for_occupancy(base_price: float, occupancy: float) -> float:
    """Return the fare for ``base_price`` at the given occupancy rate.

    At or above 90% occupancy the fare doubles, at or below 10% it halves,
    and in between it scales linearly as ``0.5 + 1.5 * occupancy``. The bands
    meet with a jump at both boundaries.
    """

    if occupancy >= HIGH_OCCUPANCY:
        return base_price * HIGH_OCCUPANCY_MULTIPLIER
    if occupancy <= LOW_OCCUPANCY:
        return base_price * LOW_OCCUPANCY_MULTIPLIER
    return base_price * (0.5 + 1.5 * occupancy)


@dataclass(unsafe_hash=True)
class Airport:
    """An airport; equality and hashing use code, name and location together."""

    code: str
    name: str
    location: str = ""

    def __post_init__(self) -> None:
        if not self.code or not self.name:
            raise ValueError("Airport code and name cannot be empty")

    def __str__(self) -> str:
        return f"{self.name} ({self.code}) - {self.location}"


class ReservationStatus(Enum):
    PENDING = "Pending Confirmation"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"

    @property
    def description(self) -> str:
        return self.value


@dataclass(eq=False)
class Flight:
    """A single leg with its own seat inventory.

    ``available_seats`` only changes through :meth:`book_seats` and
    :meth:`release_seats`, both of which hold the flight's lock. The current
    price is derived from occupancy on every read.
    """

    origin: Airport
    destination: Airport
    total_seats: int
    base_price: float
    flight_date: Optional[date] = None
    flight_number: str = ""
    available_seats: int = field(init=False)
    lock: threading.RLock = field(init=False, repr=False, default_factory=threading.RLock)
    lock_order: int = field(init=False, repr=False, default_factory=lambda: next(_lock_order))

    def __post_init__(self) -> None:
        if self.origin is None or self.destination is None:
            raise ValueError("Origin and destination cannot be null")
        if self.total_seats <= 0 or self.base_price <= 0:
            raise ValueError("Total seats and base price must be positive")
        if self.origin == self.destination:
            raise ValueError("Origin and destination cannot be the same")
        self.available_seats = self.total_seats

    def book_seats(self, seat_count: int) -> bool:
        """Take ``seat_count`` seats; returns ``False`` and changes nothing if short."""

        with self.lock:
            if seat_count <= 0 or seat_count > self.available_seats:
                return False
            self.available_seats -= seat_count
            return True

    def release_seats(self, seat_count: int) -> None:
        """Return seats to inventory, ignoring releases that would overfill the flight."""

        with self.lock:
            if seat_count > 0 and self.available_seats + seat_count <= self.total_seats:
                self.available_seats += seat_count

    @property
    def booked_seats(self) -> int:
        return self.total_seats - self.available_seats

    @property
    def occupancy_rate(self) -> float:
        return self.booked_seats / self.total_seats

    @property
    def current_price(self) -> float:
        return price_for_occupancy(self.base_price, self.occupancy_rate)

    def has_available_seats(self) -> bool:
        return self.available_seats > 0

    def __str__(self) -> str:
        return (
            f"{self.flight_number}: {self.origin.code} -> {self.destination.code}\n"
            f"Date: {self.flight_date}\n"
            f"Seats: {self.available_seats} available / {self.total_seats} total "
            f"({self.occupancy_rate * 100:.1f}% full)\n"
            f"Price : {self.current_price:.2f} (Base: {self.base_price:.2f})"
        )


__all__ = [
    "Airport",
    "Flight",
    "ReservationStatus",
    "price_for_occupancy",
]
