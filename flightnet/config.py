"""Environment driven settings for the flight network tools."""
from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL = os.environ.get("FLIGHTNET_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

SAMPLE_SEED = int(os.environ.get("FLIGHTNET_SAMPLE_SEED", 42))
SIMULATE_BOOKINGS = os.environ.get("FLIGHTNET_SIMULATE_BOOKINGS", "true").lower() == "true"

# First id handed out by a fresh reservation sequence.
RESERVATION_START = int(os.environ.get("FLIGHTNET_RESERVATION_START", 1000))


def configure_logging(level: Optional[str] = None) -> None:
    """Install a root handler at ``level`` (defaults to ``FLIGHTNET_LOG_LEVEL``)."""

    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
