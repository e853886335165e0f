from datetime import date

import pytest

from flightnet import analytics
from flightnet.models import Airport, Flight
from flightnet.network import FlightNetwork

ATH = Airport("ATH", "Athens", "Greece")
SKG = Airport("SKG", "Thessaloniki", "Greece")
LHR = Airport("LHR", "Heathrow", "London")


def build_network():
    network = FlightNetwork()
    network.add_flights(
        [
            Flight(ATH, SKG, 100, 80.0, date(2030, 1, 1), "A3301"),
            Flight(SKG, LHR, 100, 100.0, date(2030, 1, 1), "A3501"),
            Flight(ATH, LHR, 100, 300.0, date(2030, 1, 1), "A3401"),
            Flight(LHR, ATH, 100, 290.0, date(2030, 1, 1), "BA2801"),
        ]
    )
    return network


def test_network_statistics_on_an_empty_network():
    stats = analytics.network_statistics(FlightNetwork())

    assert stats.airports == 0
    assert stats.occupancy_percent == 0.0
    assert stats.avg_flights_per_airport == 0.0
    assert stats.estimated_revenue == 0.0


def test_network_statistics_after_bookings():
    network = build_network()
    direct = network.search_routes("ATH", "LHR")[1]
    assert direct.is_direct
    confirmed = network.make_reservation(direct, 50)
    cancelled = network.make_reservation(network.search_routes("ATH", "SKG")[0], 10)
    network.cancel_reservation(cancelled.reservation_id)

    stats = analytics.network_statistics(network)

    assert stats.airports == 3
    assert stats.flights == 4
    assert stats.total_seats == 400
    assert stats.booked_seats == 50
    assert stats.occupancy_percent == pytest.approx(12.5)
    assert stats.avg_flights_per_airport == pytest.approx(4 / 3)
    assert stats.reservations == 2
    assert stats.confirmed_reservations == 1
    assert stats.confirmed_value == pytest.approx(confirmed.total_cost)
    # 50 seats at 0.5 occupancy on a 300 base fare
    assert stats.estimated_revenue == pytest.approx(50 * 375.0)
    assert ("Booked Seats", "50") in stats.as_rows()


def test_popular_routes_count_confirmed_and_completed_only():
    network = build_network()
    via_skg = network.search_routes("ATH", "LHR")[0]
    for _ in range(3):
        network.make_reservation(via_skg, 1)
    home = network.make_reservation(network.search_routes("LHR", "ATH")[0], 1)
    network.complete_reservation(home.reservation_id)
    dropped = network.make_reservation(network.search_routes("ATH", "SKG")[0], 1)
    network.cancel_reservation(dropped.reservation_id)

    ranking = analytics.popular_routes(network)

    assert ranking == [("ATH -> LHR", 3), ("LHR -> ATH", 1)]
    assert analytics.popular_routes(network, limit=1) == [("ATH -> LHR", 3)]


def test_airport_statistics():
    network = build_network()
    network.get_flights_from("ATH")[0].book_seats(25)

    traffic = analytics.airport_statistics(network, limit=1)

    assert len(traffic) == 1
    athens = traffic[0]
    assert athens.airport is ATH
    assert athens.outgoing_flights == 2
    assert athens.outgoing_seats == 200
    assert athens.outgoing_booked == 25
    assert athens.outgoing_occupancy == pytest.approx(12.5)
    assert athens.incoming_flights == 1
    assert athens.incoming_occupancy == 0.0


def test_analyze_pricing_summarises_options():
    network = build_network()

    report = analytics.analyze_pricing(network, "ATH", "LHR")

    assert report.prices == [90.0, 150.0]
    assert report.cheapest == 90.0
    assert report.most_expensive == 150.0
    assert report.average == 120.0
    assert report.price_range == 60.0


def test_pricing_report_without_routes():
    network = build_network()
    network.get_flights_from("SKG")[0].book_seats(100)

    report = analytics.analyze_pricing(network, "SKG", "ATH")

    assert report.routes == []
    assert report.cheapest == 0.0
    assert report.average == 0.0


def test_dataframes_describe_flights_and_routes():
    network = build_network()

    flights = analytics.flights_dataframe(network)
    routes = analytics.routes_dataframe(network.search_routes("ATH", "LHR"))

    assert len(flights) == 4
    assert {"Flight", "Available Seats", "Current Price"} <= set(flights.columns)
    assert list(routes["Route"]) == ["ATH -> SKG -> LHR", "ATH -> LHR"]
    assert list(routes["Type"]) == ["1-Stop", "Direct"]
    assert list(routes["Price"]) == [90.0, 150.0]
