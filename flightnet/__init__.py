"""Flight network with occupancy-driven pricing and atomic multi-leg reservations."""
from typing import Any

from .dataset import build_sample_network
from .directory import DirectoryStatistics, KeyedDirectory
from .graph import AirportNotFoundError, FlightGraph
from .models import Airport, Flight, ReservationStatus, price_for_occupancy
from .network import CancellationOutcome, CancellationResult, FlightNetwork
from .reservations import Reservation, ReservationSequence
from .routes import Route


def cli_main(*args: Any, **kwargs: Any) -> int:  # pragma: no cover - thin wrapper
    from .cli import main as _cli_main

    return _cli_main(*args, **kwargs)


def create_app(*args: Any, **kwargs: Any):  # pragma: no cover - thin wrapper
    from .web import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "Airport",
    "AirportNotFoundError",
    "CancellationOutcome",
    "CancellationResult",
    "DirectoryStatistics",
    "Flight",
    "FlightGraph",
    "FlightNetwork",
    "KeyedDirectory",
    "Reservation",
    "ReservationSequence",
    "ReservationStatus",
    "Route",
    "build_sample_network",
    "cli_main",
    "create_app",
    "price_for_occupancy",
]
