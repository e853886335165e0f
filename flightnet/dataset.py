"""Demo network of Greek and European airports for tests, the CLI and the API."""
from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple

from .config import SAMPLE_SEED, SIMULATE_BOOKINGS
from .models import Airport, Flight
from .network import FlightNetwork

AIRPORTS: Sequence[Tuple[str, str, str]] = (
    ("ATH", "Athens International Airport Eleftherios Venizelos", "Athens, Greece"),
    ("SKG", "Thessaloniki Airport Makedonia", "Thessaloniki, Greece"),
    ("HER", "Heraklion International Airport Nikos Kazantzakis", "Crete, Greece"),
    ("RHO", "Rhodes International Airport Diagoras", "Rhodes, Greece"),
    ("MYK", "Mykonos Airport", "Mykonos, Greece"),
    ("JTR", "Santorini Airport", "Santorini, Greece"),
    ("CFU", "Corfu International Airport", "Corfu, Greece"),
    ("KGS", "Kos Airport", "Kos, Greece"),
    ("LHR", "London Heathrow Airport", "London, United Kingdom"),
    ("CDG", "Charles de Gaulle Airport", "Paris, France"),
    ("FCO", "Leonardo da Vinci Airport", "Rome, Italy"),
    ("MAD", "Madrid-Barajas Airport", "Madrid, Spain"),
    ("FRA", "Frankfurt Airport", "Frankfurt, Germany"),
    ("AMS", "Amsterdam Airport Schiphol", "Amsterdam, Netherlands"),
    ("ZUR", "Zurich Airport", "Zurich, Switzerland"),
    ("VIE", "Vienna International Airport", "Vienna, Austria"),
)

# (origin, destination, seats, base price, days from today, flight number)
FLIGHTS: Sequence[Tuple[str, str, int, float, int, str]] = (
    ("ATH", "SKG", 150, 80.0, 1, "A3301"),
    ("SKG", "ATH", 150, 85.0, 1, "A3302"),
    ("ATH", "HER", 180, 120.0, 1, "A3303"),
    ("HER", "ATH", 180, 115.0, 1, "A3304"),
    ("ATH", "RHO", 160, 140.0, 1, "A3305"),
    ("RHO", "ATH", 160, 135.0, 1, "A3306"),
    ("ATH", "MYK", 100, 95.0, 1, "A3307"),
    ("MYK", "ATH", 100, 90.0, 1, "A3308"),
    ("ATH", "JTR", 120, 110.0, 1, "A3309"),
    ("JTR", "ATH", 120, 105.0, 1, "A3310"),
    ("ATH", "CFU", 140, 100.0, 1, "A3311"),
    ("CFU", "ATH", 140, 95.0, 1, "A3312"),
    ("ATH", "KGS", 130, 125.0, 1, "A3313"),
    ("KGS", "ATH", 130, 120.0, 1, "A3314"),
    ("ATH", "LHR", 200, 280.0, 1, "A3401"),
    ("LHR", "ATH", 200, 290.0, 1, "BA2801"),
    ("ATH", "CDG", 180, 260.0, 1, "A3402"),
    ("CDG", "ATH", 180, 270.0, 1, "AF1832"),
    ("ATH", "FCO", 190, 220.0, 1, "A3403"),
    ("FCO", "ATH", 190, 230.0, 1, "AZ714"),
    ("ATH", "MAD", 170, 250.0, 1, "A3404"),
    ("MAD", "ATH", 170, 240.0, 1, "IB3123"),
    ("ATH", "FRA", 160, 300.0, 1, "A3405"),
    ("FRA", "ATH", 160, 310.0, 1, "LH1266"),
    ("ATH", "AMS", 150, 280.0, 1, "A3406"),
    ("AMS", "ATH", 150, 285.0, 1, "KL1573"),
    ("SKG", "LHR", 180, 320.0, 1, "A3501"),
    ("LHR", "SKG", 180, 330.0, 1, "BA2802"),
    ("SKG", "FRA", 140, 280.0, 1, "A3502"),
    ("FRA", "SKG", 140, 290.0, 1, "LH1267"),
    ("SKG", "ZUR", 120, 200.0, 1, "A3503"),
    ("ZUR", "SKG", 120, 210.0, 1, "LX8392"),
    ("SKG", "VIE", 130, 220.0, 1, "A3504"),
    ("VIE", "SKG", 130, 215.0, 1, "OS542"),
    ("HER", "LHR", 200, 350.0, 1, "A3601"),
    ("LHR", "HER", 200, 360.0, 1, "BA2803"),
    ("RHO", "FRA", 160, 320.0, 1, "A3602"),
    ("FRA", "RHO", 160, 315.0, 1, "LH1268"),
    ("MYK", "CDG", 100, 380.0, 1, "A3603"),
    ("CDG", "MYK", 100, 390.0, 1, "AF1833"),
    ("JTR", "FCO", 120, 340.0, 1, "A3604"),
    ("FCO", "JTR", 120, 335.0, 1, "AZ715"),
    ("LHR", "CDG", 300, 180.0, 1, "BA301"),
    ("CDG", "LHR", 300, 185.0, 1, "AF1234"),
    ("FRA", "AMS", 250, 120.0, 1, "LH401"),
    ("AMS", "FRA", 250, 125.0, 1, "KL1234"),
    ("MAD", "FCO", 200, 150.0, 1, "IB501"),
    ("FCO", "MAD", 200, 155.0, 1, "AZ601"),
    ("ZUR", "VIE", 180, 140.0, 1, "LX701"),
    ("VIE", "ZUR", 180, 145.0, 1, "OS701"),
    ("LHR", "MYK", 150, 420.0, 1, "A3701"),
    ("CDG", "JTR", 160, 400.0, 1, "A3702"),
    ("FRA", "CFU", 170, 380.0, 1, "A3703"),
    ("AMS", "KGS", 140, 360.0, 1, "A3704"),
    ("ATH", "LHR", 200, 300.0, 2, "A3801"),
    ("SKG", "FRA", 140, 290.0, 2, "A3802"),
    ("ATH", "CDG", 180, 280.0, 2, "A3803"),
    ("HER", "FCO", 190, 370.0, 2, "A3804"),
)


def sample_airports() -> List[Airport]:
    return [Airport(code, name, location) for code, name, location in AIRPORTS]


def sample_flights(airports: Sequence[Airport], *, today: Optional[date] = None) -> List[Flight]:
    by_code: Dict[str, Airport] = {airport.code: airport for airport in airports}
    start = today or date.today()
    return [
        Flight(
            by_code[origin],
            by_code[destination],
            seats,
            price,
            start + timedelta(days=offset),
            number,
        )
        for origin, destination, seats, price, offset, number in FLIGHTS
    ]


def simulate_initial_bookings(network: FlightNetwork, rng: random.Random) -> int:
    """Fill each flight to a random 0-70% of capacity; returns seats booked."""

    booked = 0
    for flight in network.graph.all_flights():
        seats = rng.randint(0, int(flight.total_seats * 0.7))
        if flight.book_seats(seats):
            booked += seats
    return booked


def build_sample_network(
    *,
    seed: Optional[int] = SAMPLE_SEED,
    simulate_bookings: bool = SIMULATE_BOOKINGS,
    today: Optional[date] = None,
) -> FlightNetwork:
    """Return the demo network, optionally pre-loaded with seeded random bookings."""

    network = FlightNetwork()
    airports = sample_airports()
    network.add_airports(airports)
    network.add_flights(sample_flights(airports, today=today))
    if simulate_bookings:
        simulate_initial_bookings(network, random.Random(seed))
    return network


__all__ = [
    "AIRPORTS",
    "FLIGHTS",
    "build_sample_network",
    "sample_airports",
    "sample_flights",
    "simulate_initial_bookings",
]
