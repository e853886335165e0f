import random
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from flightnet.graph import AirportNotFoundError
from flightnet.models import Airport, Flight, ReservationStatus
from flightnet.network import CancellationOutcome, FlightNetwork

ATH = Airport("ATH", "Athens International Airport Eleftherios Venizelos", "Athens, Greece")
SKG = Airport("SKG", "Thessaloniki Airport Makedonia", "Thessaloniki, Greece")
LHR = Airport("LHR", "London Heathrow Airport", "London, United Kingdom")


def build_network(seats=150):
    network = FlightNetwork()
    network.add_airports([ATH, SKG, None, LHR])
    network.add_flights(
        [
            Flight(ATH, SKG, seats, 80.0, date(2030, 1, 1), "A3301"),
            None,
            Flight(SKG, LHR, seats, 320.0, date(2030, 1, 1), "A3501"),
            Flight(ATH, LHR, seats, 280.0, date(2030, 1, 1), "A3401"),
        ]
    )
    return network


def test_bulk_registration_skips_missing_entries():
    network = build_network()

    assert network.graph.airport_codes() == {"ATH", "SKG", "LHR"}
    assert network.graph.total_flights == 3
    with pytest.raises(ValueError):
        network.add_airport(None)
    with pytest.raises(ValueError):
        network.add_flights(None)


def test_search_routes_returns_cheapest_first():
    network = build_network()

    routes = network.search_routes("ATH", "LHR")

    assert [route.total_price for route in routes] == [140.0, 200.0]
    assert routes[0].is_direct


def test_search_routes_filters_by_passenger_count():
    network = build_network(seats=10)
    network.get_flights_from("ATH")[1].book_seats(8)

    routes = network.search_routes("ATH", "LHR", 3)

    assert len(routes) == 1
    assert not routes[0].is_direct
    with pytest.raises(ValueError):
        network.search_routes("ATH", "LHR", 0)


def test_search_routes_rejects_unknown_airports():
    network = build_network()

    with pytest.raises(AirportNotFoundError, match="Destination airport not found: JFK"):
        network.search_routes("ATH", "JFK")
    with pytest.raises(ValueError):
        network.search_routes(None, "LHR")


def test_single_flight_pricing_scenario():
    network = build_network()
    route = network.search_routes("ATH", "SKG")[0]
    flight = route.flights[0]
    assert flight.current_price == 40.0

    reservation = network.make_reservation(route, 135)

    assert reservation is not None
    assert flight.available_seats == 15
    assert flight.current_price == 160.0
    assert reservation.total_cost == pytest.approx(160.0 * 135)


def test_oversized_reservation_fails_without_side_effects():
    network = build_network()
    route = network.search_routes("ATH", "SKG")[0]

    assert network.make_reservation(route, 151) is None
    assert route.flights[0].available_seats == 150
    assert network.reservations == []
    with pytest.raises(ValueError):
        network.make_reservation(route, 0)


def test_reservations_are_indexed_by_id_and_customer():
    network = build_network()
    route = network.search_routes("ATH", "LHR")[0]

    first = network.make_reservation(route, 2, "ann@example.com", ["Ann", "Bob"])
    second = network.make_reservation(route, 1)
    third = network.make_reservation(route, 1, "ann@example.com")

    assert [r.reservation_id for r in (first, second, third)] == [1000, 1001, 1002]
    assert network.get_reservation(1001) is second
    assert network.customer_reservations("ann@example.com") == [first, third]
    assert network.customer_reservations(None) == []
    assert network.customer_reservations("bob@example.com") == []


def test_independent_networks_have_independent_ids():
    first = build_network()
    second = build_network()

    one = first.make_reservation(first.search_routes("ATH", "SKG")[0], 1)
    other = second.make_reservation(second.search_routes("ATH", "SKG")[0], 1)

    assert one.reservation_id == other.reservation_id == 1000


def test_cancel_reservation_outcomes():
    network = build_network()
    route = network.search_routes("ATH", "LHR")[1]
    legs = route.flights
    reservation = network.make_reservation(route, 4)
    assert [leg.available_seats for leg in legs] == [146, 146]

    result = network.cancel_reservation(reservation.reservation_id)
    assert result.success
    assert result.outcome is CancellationOutcome.CANCELLED
    assert [leg.available_seats for leg in legs] == [150, 150]

    again = network.cancel_reservation(reservation.reservation_id)
    assert again.outcome is CancellationOutcome.INVALID_STATUS
    assert again.status is ReservationStatus.CANCELLED
    assert not again.success

    missing = network.cancel_reservation(42)
    assert missing.outcome is CancellationOutcome.NOT_FOUND
    assert "not found" in missing.message


def test_completed_reservation_cannot_be_cancelled():
    network = build_network()
    reservation = network.make_reservation(network.search_routes("ATH", "SKG")[0], 1)

    assert network.complete_reservation(reservation.reservation_id)
    assert not network.complete_reservation(reservation.reservation_id)
    assert not network.complete_reservation(999)
    assert network.cancel_reservation(reservation.reservation_id).outcome is CancellationOutcome.INVALID_STATUS


def test_concurrent_reservations_respect_capacity():
    network = build_network(seats=12)
    route = network.search_routes("ATH", "LHR")[1]

    def attempt(_):
        return network.make_reservation(route, 2) is not None

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(20)))

    assert sum(results) == 6
    assert all(leg.available_seats == 0 for leg in route.flights)
    assert len(network.reservations) == 6
    assert len({r.reservation_id for r in network.reservations}) == 6


def test_simulated_bookings_keep_inventory_in_bounds():
    network = build_network()

    booked = network.simulate_bookings(random.Random(7))

    flights = network.graph.all_flights()
    assert booked == sum(flight.booked_seats for flight in flights)
    assert all(0 <= flight.available_seats <= flight.total_seats for flight in flights)


def test_validate_and_export_summary():
    network = build_network()
    network.make_reservation(network.search_routes("ATH", "SKG")[0], 2)

    assert network.validate()
    summary = network.export_summary(today=date(2030, 1, 1))
    assert summary.startswith("FLIGHT NETWORK SUMMARY\nGenerated: 2030-01-01")
    assert "Athens International Airport Eleftherios Venizelos (ATH)" in summary
    assert "A3501: SKG -> LHR" in summary
    assert "Reservation #1000" in summary
