"""Directed flight graph keyed by airport code, with route discovery."""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Dict, List, Optional, Set

from .directory import DirectoryStatistics, KeyedDirectory
from .models import Airport, Flight
from .routes import Route, price_key

logger = logging.getLogger(__name__)


class AirportNotFoundError(LookupError):
    """Raised when a search references an airport code that was never registered."""

    def __init__(self, code: str, role: str = "Airport") -> None:
        super().__init__(f"{role} airport not found: {code}")
        self.code = code


class FlightGraph:
    """Airports plus, for each origin code, its outgoing flights.

    There is no incoming index: :meth:`get_flights_to` scans every adjacency
    list.
    """

    def __init__(self) -> None:
        self._airports: KeyedDirectory[str, Airport] = KeyedDirectory()
        self._adjacency: KeyedDirectory[str, List[Flight]] = KeyedDirectory()
        self._total_flights = 0
        self._lock = threading.RLock()

    def add_airport(self, airport: Airport) -> None:
        """Register ``airport`` unless its code is already known (first one wins)."""

        if airport is None:
            raise ValueError("Airport cannot be null")
        with self._lock:
            if self._airports.contains_key(airport.code):
                return
            self._airports.put(airport.code, airport)
            self._adjacency.put(airport.code, [])
            logger.debug("Registered airport %s", airport.code)

    def add_flight(self, flight: Flight) -> None:
        """Add ``flight`` to its origin's adjacency list, registering both endpoints."""

        if flight is None:
            raise ValueError("Flight cannot be null")
        with self._lock:
            self.add_airport(flight.origin)
            self.add_airport(flight.destination)
            self._adjacency.get(flight.origin.code).append(flight)
            self._total_flights += 1

    def _outgoing(self, code: str) -> List[Flight]:
        return self._adjacency.get(code) or []

    def find_all_direct_flights(self, origin_code: str, dest_code: str) -> List[Flight]:
        """Bookable flights from ``origin_code`` to ``dest_code``, cheapest first.

        ``sorted`` is stable, so equally priced flights keep adjacency order.
        """

        flights = [
            flight
            for flight in self._outgoing(origin_code)
            if flight.destination.code == dest_code and flight.has_available_seats()
        ]
        return sorted(flights, key=lambda flight: flight.current_price)

    def find_direct_flight(self, origin_code: str, dest_code: str) -> Optional[Flight]:
        flights = self.find_all_direct_flights(origin_code, dest_code)
        return flights[0] if flights else None

    def _require_airports(self, origin_code: str, dest_code: str) -> None:
        if origin_code is None or dest_code is None:
            raise ValueError("Airport codes cannot be null")
        if not self.has_airport(origin_code):
            raise AirportNotFoundError(origin_code, "Origin")
        if not self.has_airport(dest_code):
            raise AirportNotFoundError(dest_code, "Destination")

    def _direct_routes(self, origin_code: str, dest_code: str) -> List[Route]:
        return [Route([flight]) for flight in self.find_all_direct_flights(origin_code, dest_code)]

    def _one_stop_routes(self, origin_code: str, dest_code: str) -> List[Route]:
        routes: List[Route] = []
        for first in self._outgoing(origin_code):
            if not first.has_available_seats():
                continue
            layover = first.destination.code
            if layover == dest_code:
                continue
            for second in self.find_all_direct_flights(layover, dest_code):
                route = Route([first, second])
                if route.is_valid:
                    routes.append(route)
        return routes

    def find_routes(self, origin_code: str, dest_code: str) -> List[Route]:
        """Direct and one-stop routes, ordered by price then duration."""

        self._require_airports(origin_code, dest_code)
        routes = [route for route in self._direct_routes(origin_code, dest_code) if route.is_valid]
        routes.extend(self._one_stop_routes(origin_code, dest_code))
        routes.sort(key=price_key)
        logger.debug("Found %d route(s) %s -> %s", len(routes), origin_code, dest_code)
        return routes

    def find_routes_with_max_stops(self, origin_code: str, dest_code: str, max_stops: int) -> List[Route]:
        """Like :meth:`find_routes` but capped at ``max_stops`` (searches stop at one)."""

        if max_stops < 0:
            raise ValueError("Max stops cannot be negative")
        if max_stops == 0:
            self._require_airports(origin_code, dest_code)
            return self._direct_routes(origin_code, dest_code)
        return self.find_routes(origin_code, dest_code)

    def get_airport(self, code: str) -> Optional[Airport]:
        return self._airports.get(code)

    def has_airport(self, code: str) -> bool:
        return self._airports.contains_key(code)

    def get_flights_from(self, code: str) -> List[Flight]:
        return list(self._outgoing(code))

    def get_flights_to(self, code: str) -> List[Flight]:
        incoming: List[Flight] = []
        for origin_code in self.airport_codes():
            incoming.extend(
                flight for flight in self._outgoing(origin_code) if flight.destination.code == code
            )
        return incoming

    def airport_codes(self) -> Set[str]:
        return self._airports.key_set()

    def airports(self) -> List[Airport]:
        return self._airports.values()

    def all_flights(self) -> List[Flight]:
        flights: List[Flight] = []
        for code in sorted(self.airport_codes()):
            flights.extend(self._outgoing(code))
        return flights

    @property
    def total_flights(self) -> int:
        return self._total_flights

    def remove_airport(self, code: str) -> bool:
        """Drop an airport together with every flight into or out of it."""

        with self._lock:
            if not self.has_airport(code):
                return False

            self._total_flights -= len(self._outgoing(code))
            for origin_code in self.airport_codes():
                if origin_code == code:
                    continue
                flights = self._outgoing(origin_code)
                kept = [flight for flight in flights if flight.destination.code != code]
                self._total_flights -= len(flights) - len(kept)
                flights[:] = kept

            self._airports.remove(code)
            self._adjacency.remove(code)
            logger.info("Removed airport %s", code)
            return True

    def hub_airports(self, limit: int) -> List[Airport]:
        """Airports with the most outgoing flights, busiest first."""

        if limit <= 0:
            raise ValueError("Limit must be positive")
        ranked = sorted(self.airports(), key=lambda airport: len(self._outgoing(airport.code)), reverse=True)
        return ranked[:limit]

    def validate(self) -> bool:
        """Check that every flight's endpoints are registered airports."""

        for code in self.airport_codes():
            for flight in self._outgoing(code):
                if not self.has_airport(flight.origin.code) or not self.has_airport(flight.destination.code):
                    return False
        return True

    def get_shortest_path(self, origin_code: str, dest_code: str) -> List[str]:
        """Fewest-hop airport path over flights that still have seats.

        Returns ``[]`` when either airport is unknown or unreachable.
        """

        if not self.has_airport(origin_code) or not self.has_airport(dest_code):
            return []
        if origin_code == dest_code:
            return [origin_code]

        parents: Dict[str, Optional[str]] = {origin_code: None}
        queue = deque([origin_code])
        while queue:
            current = queue.popleft()
            if current == dest_code:
                path: List[str] = []
                node: Optional[str] = current
                while node is not None:
                    path.append(node)
                    node = parents[node]
                return path[::-1]
            for flight in self._outgoing(current):
                neighbour = flight.destination.code
                if neighbour not in parents and flight.has_available_seats():
                    parents[neighbour] = current
                    queue.append(neighbour)
        return []

    def directory_statistics(self) -> Dict[str, DirectoryStatistics]:
        return {
            "airports": self._airports.statistics(),
            "adjacency": self._adjacency.statistics(),
        }


__all__ = ["AirportNotFoundError", "FlightGraph"]
