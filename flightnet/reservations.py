"""Reservation lifecycle on top of a :class:`~flightnet.routes.Route`."""
from __future__ import annotations

import itertools
import threading
from datetime import date, datetime
from typing import Iterable, List, Optional

from .config import RESERVATION_START
from .models import ReservationStatus
from .routes import Route

# (minimum days before departure, fraction refunded), checked in order.
REFUND_TIERS = ((7, 1.0), (3, 0.8), (1, 0.5))


class ReservationSequence:
    """Thread-safe monotonically increasing reservation id generator."""

    def __init__(self, start: int = RESERVATION_START) -> None:
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)


_default_sequence = ReservationSequence()


class Reservation:
    """A passenger booking on a route.

    Reservations start ``PENDING`` and hold no seats. :meth:`confirm` is the
    only transition that takes seats; cancelling a confirmed reservation gives
    them back. ``CANCELLED`` and ``COMPLETED`` are terminal.
    """

    def __init__(
        self,
        route: Route,
        passenger_count: int,
        *,
        customer_email: Optional[str] = None,
        passenger_names: Optional[Iterable[str]] = None,
        sequence: Optional[ReservationSequence] = None,
        booked_at: Optional[datetime] = None,
    ) -> None:
        if route is None or passenger_count <= 0:
            raise ValueError("Invalid route or passenger count")
        names = list(passenger_names or [])
        if len(names) > passenger_count:
            raise ValueError("More passenger names than passengers")

        self.reservation_id = (sequence or _default_sequence).next_id()
        self.route = route
        self.passenger_count = passenger_count
        self.customer_email = customer_email or ""
        self._passenger_names = names
        self.booked_at = booked_at or datetime.now()
        self.status = ReservationStatus.PENDING
        self.total_cost = route.total_price * passenger_count
        self._lock = threading.RLock()

    @property
    def booking_date(self) -> date:
        return self.booked_at.date()

    @property
    def passenger_names(self) -> List[str]:
        return list(self._passenger_names)

    def confirm(self) -> bool:
        """Book seats on the route; the cost is repriced at the new occupancy."""

        with self._lock:
            if self.status is not ReservationStatus.PENDING:
                return False
            if not self.route.book_route(self.passenger_count):
                return False
            self.status = ReservationStatus.CONFIRMED
            self.total_cost = self.route.total_price * self.passenger_count
            return True

    def cancel(self) -> bool:
        with self._lock:
            if self.status in (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED):
                return False
            if self.status is ReservationStatus.CONFIRMED:
                self.route.cancel_route(self.passenger_count)
            self.status = ReservationStatus.CANCELLED
            return True

    def complete(self) -> bool:
        with self._lock:
            if self.status is not ReservationStatus.CONFIRMED:
                return False
            self.status = ReservationStatus.COMPLETED
            return True

    def can_modify(self) -> bool:
        return self.status in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

    def update_passenger_count(self, new_count: int) -> bool:
        """Change the party size, booking or releasing the difference if confirmed."""

        with self._lock:
            if new_count <= 0 or not self.can_modify():
                return False
            if new_count < len(self._passenger_names):
                return False

            if self.status is ReservationStatus.CONFIRMED:
                difference = new_count - self.passenger_count
                if difference > 0 and not self.route.book_route(difference):
                    return False
                if difference < 0:
                    self.route.cancel_route(-difference)

            self.passenger_count = new_count
            self.total_cost = self.route.total_price * new_count
            return True

    def add_passenger_name(self, name: Optional[str]) -> bool:
        if name is None or not name.strip():
            return False
        with self._lock:
            if len(self._passenger_names) >= self.passenger_count:
                return False
            self._passenger_names.append(name.strip())
            return True

    @property
    def departure_date(self) -> Optional[date]:
        return self.route.flights[0].flight_date

    def days_until_departure(self, today: Optional[date] = None) -> int:
        """Whole days from ``today`` to the first leg's date, ``-1`` when undated."""

        departure = self.departure_date
        if departure is None:
            return -1
        return (departure - (today or date.today())).days

    def is_refundable(self, today: Optional[date] = None) -> bool:
        return self.days_until_departure(today) >= 1 and self.status is not ReservationStatus.CANCELLED

    def refund_amount(self, today: Optional[date] = None) -> float:
        if not self.is_refundable(today):
            return 0.0
        days = self.days_until_departure(today)
        for minimum_days, fraction in REFUND_TIERS:
            if days >= minimum_days:
                return self.total_cost * fraction
        return 0.0

    def validate(self) -> bool:
        return (
            self.route is not None
            and self.route.is_valid
            and self.passenger_count > 0
            and self.total_cost >= 0
            and len(self._passenger_names) <= self.passenger_count
        )

    def summary(self) -> str:
        lines = [
            "=== Reservation Summary ===",
            f"Reservation ID: #{self.reservation_id}",
            f"Status: {self.status.description}",
            f"Booking Date: {self.booking_date}",
            f"Passengers: {self.passenger_count}",
            f"Total Cost: ${self.total_cost:.2f}",
            "",
            "Route Details:",
            self.route.describe(),
        ]
        if self.customer_email:
            lines.append(f"Customer Email: {self.customer_email}")
        if self._passenger_names:
            lines.append("Passengers:")
            lines.extend(
                f"  {position}. {name}" for position, name in enumerate(self._passenger_names, start=1)
            )
        return "\n".join(lines)

    def __str__(self) -> str:
        return (
            f"Reservation #{self.reservation_id} ({self.booking_date}) - "
            f"{self.passenger_count} passengers - ${self.total_cost:.2f} - {self.status.description}"
        )


def booking_time_key(reservation: Reservation) -> datetime:
    return reservation.booked_at


def departure_key(reservation: Reservation) -> date:
    return reservation.departure_date or date.max


def cost_key(reservation: Reservation) -> float:
    """Sort key placing the most expensive reservation first."""

    return -reservation.total_cost


__all__ = [
    "REFUND_TIERS",
    "Reservation",
    "ReservationSequence",
    "booking_time_key",
    "cost_key",
    "departure_key",
]
