"""Booking services over a flight graph: search, reserve, cancel."""
from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .graph import FlightGraph
from .models import Airport, Flight, ReservationStatus
from .reservations import Reservation, ReservationSequence
from .routes import Route

logger = logging.getLogger(__name__)


class CancellationOutcome(Enum):
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"
    INVALID_STATUS = "invalid_status"


@dataclass
class CancellationResult:
    outcome: CancellationOutcome
    reservation_id: int
    status: Optional[ReservationStatus] = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.outcome is CancellationOutcome.CANCELLED


class FlightNetwork:
    """Entry point for building a network and managing reservations on it."""

    def __init__(
        self,
        graph: Optional[FlightGraph] = None,
        *,
        sequence: Optional[ReservationSequence] = None,
    ) -> None:
        self.graph = graph or FlightGraph()
        self._sequence = sequence or ReservationSequence()
        self._reservations: Dict[int, Reservation] = {}
        self._by_customer: Dict[str, List[Reservation]] = {}
        self._lock = threading.RLock()

    def add_airport(self, airport: Airport) -> None:
        if airport is None:
            raise ValueError("Airport cannot be null")
        self.graph.add_airport(airport)

    def add_airports(self, airports: Iterable[Optional[Airport]]) -> None:
        if airports is None:
            raise ValueError("Airports cannot be null")
        for airport in airports:
            if airport is not None:
                self.add_airport(airport)

    def add_flight(self, flight: Flight) -> None:
        if flight is None:
            raise ValueError("Flight cannot be null")
        self.graph.add_flight(flight)

    def add_flights(self, flights: Iterable[Optional[Flight]]) -> None:
        if flights is None:
            raise ValueError("Flights cannot be null")
        for flight in flights:
            if flight is not None:
                self.add_flight(flight)

    def search_routes(
        self,
        origin_code: str,
        dest_code: str,
        min_passengers: Optional[int] = None,
    ) -> List[Route]:
        """Cheapest-first routes; with ``min_passengers`` only routes that can seat them all.

        Raises :class:`~flightnet.graph.AirportNotFoundError` for unknown codes.
        """

        if min_passengers is not None and min_passengers <= 0:
            raise ValueError("Passenger count must be positive")
        routes = self.graph.find_routes(origin_code, dest_code)
        if min_passengers is None:
            return routes
        return [route for route in routes if route.has_availability(min_passengers)]

    def make_reservation(
        self,
        route: Route,
        passenger_count: int,
        customer_email: Optional[str] = None,
        passenger_names: Optional[Iterable[str]] = None,
    ) -> Optional[Reservation]:
        """Create and confirm a reservation, or return ``None`` if seats ran out."""

        if route is None or passenger_count <= 0:
            raise ValueError("Invalid route or passenger count")

        reservation = Reservation(
            route,
            passenger_count,
            customer_email=customer_email,
            passenger_names=passenger_names,
            sequence=self._sequence,
        )
        if not reservation.confirm():
            logger.warning(
                "Reservation failed: insufficient seats for %d passenger(s) on %s",
                passenger_count,
                route,
            )
            return None

        with self._lock:
            self._reservations[reservation.reservation_id] = reservation
            if customer_email:
                self._by_customer.setdefault(customer_email, []).append(reservation)
        logger.info(
            "Reservation confirmed: #%d%s",
            reservation.reservation_id,
            f" for {customer_email}" if customer_email else "",
        )
        return reservation

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        with self._lock:
            return self._reservations.get(reservation_id)

    def cancel_reservation(self, reservation_id: int) -> CancellationResult:
        reservation = self.get_reservation(reservation_id)
        if reservation is None:
            logger.info("Reservation not found: #%d", reservation_id)
            return CancellationResult(
                CancellationOutcome.NOT_FOUND,
                reservation_id,
                message=f"Reservation not found: #{reservation_id}",
            )
        if not reservation.cancel():
            logger.info("Cannot cancel reservation #%d - status %s", reservation_id, reservation.status.name)
            return CancellationResult(
                CancellationOutcome.INVALID_STATUS,
                reservation_id,
                status=reservation.status,
                message=f"Cannot cancel reservation #{reservation_id} - Status: {reservation.status.name}",
            )
        logger.info("Reservation cancelled: #%d", reservation_id)
        return CancellationResult(
            CancellationOutcome.CANCELLED,
            reservation_id,
            status=reservation.status,
            message=f"Reservation cancelled: #{reservation_id}",
        )

    def complete_reservation(self, reservation_id: int) -> bool:
        reservation = self.get_reservation(reservation_id)
        return reservation is not None and reservation.complete()

    def customer_reservations(self, customer_email: Optional[str]) -> List[Reservation]:
        if not customer_email:
            return []
        with self._lock:
            return list(self._by_customer.get(customer_email, []))

    @property
    def reservations(self) -> List[Reservation]:
        with self._lock:
            return list(self._reservations.values())

    def get_airport(self, code: str) -> Optional[Airport]:
        return self.graph.get_airport(code)

    def get_flights_from(self, code: str) -> List[Flight]:
        return self.graph.get_flights_from(code)

    def get_flights_to(self, code: str) -> List[Flight]:
        return self.graph.get_flights_to(code)

    def simulate_bookings(self, rng: Optional[random.Random] = None) -> int:
        """Book a random 0-20% of each flight's remaining seats; returns seats booked."""

        rng = rng or random.Random()
        booked = 0
        for flight in self.graph.all_flights():
            available = flight.available_seats
            if available <= 0:
                continue
            seats = rng.randrange(max(1, int(available * 0.2)))
            if flight.book_seats(seats):
                booked += seats
        return booked

    def validate(self) -> bool:
        return self.graph.validate() and all(r.validate() for r in self.reservations)

    def export_summary(self, today: Optional[date] = None) -> str:
        lines = ["FLIGHT NETWORK SUMMARY", f"Generated: {today or date.today()}", "", "AIRPORTS:"]
        lines.extend(f"- {airport}" for airport in sorted(self.graph.airports(), key=lambda a: a.code))
        lines.extend(["", "FLIGHTS:"])
        lines.extend(f"- {str(flight)}" for flight in self.graph.all_flights())
        lines.extend(["", "RESERVATIONS:"])
        lines.extend(f"- {reservation}" for reservation in self.reservations)
        return "\n".join(lines)


__all__ = ["CancellationOutcome", "CancellationResult", "FlightNetwork"]
