"""Read-only reporting over a :class:`~flightnet.network.FlightNetwork`."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from .models import Airport, Flight, ReservationStatus
from .network import FlightNetwork
from .routes import Route

_BOOKED_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED)


@dataclass
class NetworkStatistics:
    airports: int
    flights: int
    total_seats: int
    booked_seats: int
    occupancy_percent: float
    avg_flights_per_airport: float
    reservations: int
    confirmed_reservations: int
    confirmed_value: float
    estimated_revenue: float

    def as_rows(self) -> List[Tuple[str, str]]:
        return [
            ("Airports", str(self.airports)),
            ("Total Flights", str(self.flights)),
            ("Total Seats", str(self.total_seats)),
            ("Booked Seats", str(self.booked_seats)),
            ("Occupancy Rate", f"{self.occupancy_percent:.1f}%"),
            ("Average Flights per Airport", f"{self.avg_flights_per_airport:.1f}"),
            ("Total Reservations", str(self.reservations)),
            ("Confirmed Reservations", str(self.confirmed_reservations)),
            ("Total Reservation Value", f"${self.confirmed_value:.2f}"),
            ("Estimated Revenue", f"${self.estimated_revenue:.2f}"),
        ]


@dataclass
class AirportTraffic:
    airport: Airport
    outgoing_flights: int
    outgoing_seats: int
    outgoing_booked: int
    incoming_flights: int
    incoming_seats: int
    incoming_booked: int

    @property
    def outgoing_occupancy(self) -> float:
        return self.outgoing_booked / self.outgoing_seats * 100 if self.outgoing_seats else 0.0

    @property
    def incoming_occupancy(self) -> float:
        return self.incoming_booked / self.incoming_seats * 100 if self.incoming_seats else 0.0


@dataclass
class PricingAnalysis:
    origin: str
    destination: str
    routes: List[Route]

    @property
    def prices(self) -> List[float]:
        return [route.total_price for route in self.routes]

    @property
    def cheapest(self) -> float:
        return min(self.prices, default=0.0)

    @property
    def most_expensive(self) -> float:
        return max(self.prices, default=0.0)

    @property
    def average(self) -> float:
        prices = self.prices
        return sum(prices) / len(prices) if prices else 0.0

    @property
    def price_range(self) -> float:
        return self.most_expensive - self.cheapest


def _revenue(flights: Iterable[Flight]) -> float:
    return sum(flight.current_price * flight.booked_seats for flight in flights)


def network_statistics(network: FlightNetwork) -> NetworkStatistics:
    """Aggregate seat, occupancy and revenue figures across the network."""

    flights = network.graph.all_flights()
    airports = len(network.graph.airport_codes())
    total_seats = sum(flight.total_seats for flight in flights)
    booked = sum(flight.booked_seats for flight in flights)
    confirmed = [r for r in network.reservations if r.status is ReservationStatus.CONFIRMED]

    return NetworkStatistics(
        airports=airports,
        flights=len(flights),
        total_seats=total_seats,
        booked_seats=booked,
        occupancy_percent=booked / total_seats * 100 if total_seats else 0.0,
        avg_flights_per_airport=len(flights) / airports if airports else 0.0,
        reservations=len(network.reservations),
        confirmed_reservations=len(confirmed),
        confirmed_value=sum(r.total_cost for r in confirmed),
        estimated_revenue=_revenue(flights),
    )


def airport_statistics(network: FlightNetwork, limit: int = 10) -> List[AirportTraffic]:
    """Traffic figures for the ``limit`` busiest airports by outgoing flights."""

    traffic: List[AirportTraffic] = []
    for airport in network.graph.hub_airports(limit):
        outgoing = network.get_flights_from(airport.code)
        incoming = network.get_flights_to(airport.code)
        traffic.append(
            AirportTraffic(
                airport=airport,
                outgoing_flights=len(outgoing),
                outgoing_seats=sum(f.total_seats for f in outgoing),
                outgoing_booked=sum(f.booked_seats for f in outgoing),
                incoming_flights=len(incoming),
                incoming_seats=sum(f.total_seats for f in incoming),
                incoming_booked=sum(f.booked_seats for f in incoming),
            )
        )
    return traffic


def popular_routes(network: FlightNetwork, limit: int = 10) -> List[Tuple[str, int]]:
    """Origin/destination pairs ranked by confirmed or completed bookings."""

    counts = Counter(
        f"{r.route.origin.code} -> {r.route.destination.code}"
        for r in network.reservations
        if r.status in _BOOKED_STATUSES
    )
    return counts.most_common(limit)


def analyze_pricing(network: FlightNetwork, origin_code: str, dest_code: str) -> PricingAnalysis:
    return PricingAnalysis(origin_code, dest_code, network.search_routes(origin_code, dest_code))


def flights_dataframe(network: FlightNetwork) -> pd.DataFrame:
    data: List[Dict[str, object]] = []
    for flight in network.graph.all_flights():
        data.append(
            {
                "Flight": flight.flight_number,
                "Origin": flight.origin.code,
                "Destination": flight.destination.code,
                "Date": flight.flight_date,
                "Total Seats": flight.total_seats,
                "Available Seats": flight.available_seats,
                "Occupancy (%)": round(flight.occupancy_rate * 100, 1),
                "Base Price": flight.base_price,
                "Current Price": round(flight.current_price, 2),
            }
        )
    return pd.DataFrame(data)


def routes_dataframe(routes: Iterable[Route]) -> pd.DataFrame:
    data: List[Dict[str, object]] = []
    for option, route in enumerate(routes, start=1):
        data.append(
            {
                "Option": option,
                "Route": " -> ".join([route.origin.code] + [f.destination.code for f in route.flights]),
                "Type": route.stops_label,
                "Flights": ", ".join(f.flight_number for f in route.flights),
                "Price": round(route.total_price, 2),
                "Duration": route.formatted_duration,
            }
        )
    return pd.DataFrame(data)


__all__ = [
    "AirportTraffic",
    "NetworkStatistics",
    "PricingAnalysis",
    "airport_statistics",
    "analyze_pricing",
    "flights_dataframe",
    "network_statistics",
    "popular_routes",
    "routes_dataframe",
]
