"""Multi-leg itineraries and the all-or-nothing seat booking protocol."""
from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from typing import Iterator, List, Sequence, Tuple

from .models import Airport, Flight

logger = logging.getLogger(__name__)

LEG_MINUTES = 120
LAYOVER_MINUTES = 60


class Route:
    """An ordered chain of flights where each leg departs where the last landed.

    Connectivity is checked once at construction. An invalid route is inert:
    its price and duration are zero and every booking call fails. The route
    shares its :class:`Flight` objects with the graph, so bookings made here
    are visible network-wide.
    """

    def __init__(self, flights: Sequence[Flight]) -> None:
        if not flights:
            raise ValueError("Route must contain at least one flight")
        self._flights: List[Flight] = list(flights)
        self._valid = self._is_connected()
        self._total_price = 0.0
        self._total_duration = 0
        if self._valid:
            self.refresh_price()
            self._total_duration = self._compute_duration()

    def _is_connected(self) -> bool:
        return all(
            current.destination == following.origin
            for current, following in zip(self._flights, self._flights[1:])
        )

    def _compute_duration(self) -> int:
        return len(self._flights) * LEG_MINUTES + (len(self._flights) - 1) * LAYOVER_MINUTES

    def refresh_price(self) -> float:
        """Recompute the cached total from each leg's live price."""

        if self._valid:
            self._total_price = sum(flight.current_price for flight in self._flights)
        return self._total_price

    @contextmanager
    def _locked_legs(self) -> Iterator[None]:
        # Lock every distinct leg in global order so overlapping routes cannot deadlock.
        legs = sorted({id(flight): flight for flight in self._flights}.values(), key=lambda f: f.lock_order)
        with ExitStack() as stack:
            for flight in legs:
                stack.enter_context(flight.lock)
            yield

    def has_availability(self, passenger_count: int) -> bool:
        if passenger_count <= 0 or not self._valid:
            return False
        return all(flight.available_seats >= passenger_count for flight in self._flights)

    def book_route(self, passenger_count: int) -> bool:
        """Book ``passenger_count`` seats on every leg or on none of them.

        The total price is recomputed afterwards, so it reflects the occupancy
        created by this very booking.
        """

        if passenger_count <= 0 or not self._valid:
            return False

        with self._locked_legs():
            if not self.has_availability(passenger_count):
                return False

            booked: List[Flight] = []
            for flight in self._flights:
                if flight.book_seats(passenger_count):
                    booked.append(flight)
                    continue
                logger.warning(
                    "Seat booking failed on %s after availability check; rolling back %d leg(s)",
                    flight.flight_number,
                    len(booked),
                )
                for done in booked:
                    done.release_seats(passenger_count)
                return False

            self.refresh_price()
        return True

    def cancel_route(self, passenger_count: int) -> None:
        """Release ``passenger_count`` seats on every leg."""

        if passenger_count <= 0 or not self._valid:
            return
        with self._locked_legs():
            for flight in self._flights:
                flight.release_seats(passenger_count)
            self.refresh_price()

    @property
    def is_valid(self) -> bool:
        return self._valid

    @property
    def flights(self) -> List[Flight]:
        return list(self._flights)

    @property
    def total_price(self) -> float:
        return self._total_price

    @property
    def total_duration(self) -> int:
        return self._total_duration

    @property
    def formatted_duration(self) -> str:
        hours, minutes = divmod(self._total_duration, 60)
        return f"{hours}h {minutes}m"

    @property
    def origin(self) -> Airport:
        return self._flights[0].origin

    @property
    def destination(self) -> Airport:
        return self._flights[-1].destination

    @property
    def layover_airports(self) -> List[Airport]:
        return [flight.destination for flight in self._flights[:-1]]

    @property
    def is_direct(self) -> bool:
        return len(self._flights) == 1

    @property
    def flight_count(self) -> int:
        return len(self._flights)

    @property
    def stops_label(self) -> str:
        return "Direct" if self.is_direct else f"{len(self._flights) - 1}-Stop"

    @property
    def complexity_score(self) -> float:
        return len(self._flights) * 1.0 + (self._total_duration / 60.0) * 0.1

    def describe(self) -> str:
        if not self._valid:
            return "Invalid Route - Flights are not properly connected"

        lines = [
            "=== Route Details ===",
            f"From: {self.origin}",
            f"To: {self.destination}",
            f"Type: {'Direct Flight' if self.is_direct else self.stops_label + ' Connection'}",
            f"Total Price: ${self._total_price:.2f}",
            f"Total Duration: {self.formatted_duration}",
            f"Flights: {len(self._flights)}",
            "",
        ]
        for position, flight in enumerate(self._flights, start=1):
            lines.append(f"Flight {position}:")
            lines.append(f"  {flight}")
            if position < len(self._flights):
                lines.append(f"  Layover at: {flight.destination}")
            lines.append("")
        return "\n".join(lines)

    def __str__(self) -> str:
        if not self._valid:
            return "Invalid Route"
        return (
            f"Route: {self.origin.code} -> {self.destination.code} "
            f"(${self._total_price:.2f}, {self.formatted_duration}) [{self.stops_label}]"
        )


def price_key(route: Route) -> Tuple[float, int]:
    return route.total_price, route.total_duration


def duration_key(route: Route) -> Tuple[int, float]:
    return route.total_duration, route.total_price


__all__ = ["Route", "duration_key", "price_key"]
