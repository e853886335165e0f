from datetime import date, timedelta

from flightnet.dataset import AIRPORTS, FLIGHTS, build_sample_network


def test_sample_network_without_bookings_is_empty():
    today = date(2030, 4, 1)
    network = build_sample_network(simulate_bookings=False, today=today)

    flights = network.graph.all_flights()
    assert len(network.graph.airport_codes()) == len(AIRPORTS) == 16
    assert len(flights) == len(FLIGHTS) == 58
    assert network.graph.total_flights == 58
    assert all(flight.available_seats == flight.total_seats for flight in flights)
    assert {flight.flight_date for flight in flights} == {today + timedelta(days=1), today + timedelta(days=2)}
    assert network.graph.validate()


def test_simulated_bookings_are_seeded_and_bounded():
    first = build_sample_network(seed=7)
    second = build_sample_network(seed=7)

    first_seats = [flight.available_seats for flight in first.graph.all_flights()]
    second_seats = [flight.available_seats for flight in second.graph.all_flights()]

    assert first_seats == second_seats
    for flight in first.graph.all_flights():
        assert flight.available_seats >= flight.total_seats - int(flight.total_seats * 0.7)
        assert flight.available_seats <= flight.total_seats


def test_sample_network_supports_one_stop_search():
    network = build_sample_network(simulate_bookings=False)

    routes = network.search_routes("SKG", "MYK")

    assert routes
    assert all(route.flight_count == 2 for route in routes)
    assert routes[0].total_price <= routes[-1].total_price
