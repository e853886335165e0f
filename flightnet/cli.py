"""Command line interface for searching and booking on the demo network."""
from __future__ import annotations

import argparse
import sys
from typing import Iterable, List, Optional

from tabulate import tabulate

from . import analytics, dataset
from .config import configure_logging
from .network import FlightNetwork
from .routes import Route


def _render_routes(routes: List[Route], passengers: int) -> str:
    frame = analytics.routes_dataframe(routes)
    frame["Total"] = (frame["Price"] * passengers).round(2)
    return tabulate(frame, headers="keys", tablefmt="github", showindex=False, floatfmt=".2f")


def _cmd_search(network: FlightNetwork, args: argparse.Namespace) -> int:
    routes = network.search_routes(args.origin, args.destination, args.passengers)
    if not routes:
        print(f"No available routes found between {args.origin} and {args.destination} for {args.passengers} passenger(s).")
        return 0
    print(f"Found {len(routes)} available route(s):")
    print(_render_routes(routes, args.passengers))
    return 0


def _cmd_book(network: FlightNetwork, args: argparse.Namespace) -> int:
    routes = network.search_routes(args.origin, args.destination, args.passengers)
    if not routes:
        print("No available routes found.")
        return 1
    if not 1 <= args.option <= len(routes):
        raise ValueError(f"Invalid route selection {args.option}; choose 1-{len(routes)}.")

    reservation = network.make_reservation(
        routes[args.option - 1],
        args.passengers,
        customer_email=args.email,
        passenger_names=args.name,
    )
    if reservation is None:
        print("Reservation failed: insufficient seats available.")
        return 1
    print(reservation.summary())
    return 0


def _cmd_stats(network: FlightNetwork, args: argparse.Namespace) -> int:
    stats = analytics.network_statistics(network)
    print(tabulate(stats.as_rows(), headers=["Metric", "Value"], tablefmt="github"))
    return 0


def _cmd_airports(network: FlightNetwork, args: argparse.Namespace) -> int:
    rows = [
        [
            f"{item.airport.name} ({item.airport.code})",
            item.outgoing_flights,
            f"{item.outgoing_booked}/{item.outgoing_seats}",
            f"{item.outgoing_occupancy:.1f}%",
            item.incoming_flights,
            f"{item.incoming_booked}/{item.incoming_seats}",
            f"{item.incoming_occupancy:.1f}%",
        ]
        for item in analytics.airport_statistics(network, args.limit)
    ]
    headers = ["Airport", "Out", "Out booked", "Out full", "In", "In booked", "In full"]
    print(tabulate(rows, headers=headers, tablefmt="github"))
    return 0


def _cmd_popular(network: FlightNetwork, args: argparse.Namespace) -> int:
    ranking = analytics.popular_routes(network, args.limit)
    if not ranking:
        print("No bookings found yet.")
        return 0
    print(tabulate(ranking, headers=["Route", "Bookings"], tablefmt="github"))
    return 0


def _cmd_pricing(network: FlightNetwork, args: argparse.Namespace) -> int:
    report = analytics.analyze_pricing(network, args.origin, args.destination)
    if not report.routes:
        print(f"No routes found between {args.origin} and {args.destination}")
        return 0
    rows = []
    for option, route in enumerate(report.routes, start=1):
        for flight in route.flights:
            rows.append(
                [
                    option,
                    route.stops_label,
                    flight.flight_number,
                    f"{flight.current_price:.2f}",
                    f"{flight.occupancy_rate * 100:.1f}%",
                    f"{flight.base_price:.2f}",
                ]
            )
    print(tabulate(rows, headers=["Option", "Type", "Flight", "Price", "Full", "Base"], tablefmt="github"))
    print(f"Cheapest: ${report.cheapest:.2f}")
    print(f"Most Expensive: ${report.most_expensive:.2f}")
    print(f"Average: ${report.average:.2f}")
    print(f"Price Range: ${report.price_range:.2f}")
    return 0


def _cmd_path(network: FlightNetwork, args: argparse.Namespace) -> int:
    path = network.graph.get_shortest_path(args.origin, args.destination)
    if not path:
        print(f"No path with available seats from {args.origin} to {args.destination}.")
        return 0
    print(" -> ".join(path))
    return 0


def _cmd_directory(network: FlightNetwork, args: argparse.Namespace) -> int:
    for name, stats in network.graph.directory_statistics().items():
        print(f"[{name}]")
        print(stats.describe())
    return 0


_COMMANDS = {
    "search": _cmd_search,
    "book": _cmd_book,
    "stats": _cmd_stats,
    "airports": _cmd_airports,
    "popular": _cmd_popular,
    "pricing": _cmd_pricing,
    "path": _cmd_path,
    "directory": _cmd_directory,
}


def _code(value: str) -> str:
    return value.strip().upper()


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search and book flights on the demo flight network.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the simulated initial bookings.")
    parser.add_argument(
        "--empty",
        action="store_true",
        help="Start with every flight empty instead of simulating initial bookings.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: FLIGHTNET_LOG_LEVEL).")
    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="List direct and one-stop routes, cheapest first.")
    search.add_argument("origin", type=_code)
    search.add_argument("destination", type=_code)
    search.add_argument("--passengers", type=int, default=1)

    book = commands.add_parser("book", help="Reserve seats on one of the search results.")
    book.add_argument("origin", type=_code)
    book.add_argument("destination", type=_code)
    book.add_argument("--passengers", type=int, default=1)
    book.add_argument("--option", type=int, default=1, help="1-based search result to book (default: 1).")
    book.add_argument("--email", default=None)
    book.add_argument("--name", action="append", default=None, help="Passenger name; repeat per passenger.")

    commands.add_parser("stats", help="Network wide seat, occupancy and revenue figures.")

    airports = commands.add_parser("airports", help="Traffic at the busiest airports.")
    airports.add_argument("--limit", type=int, default=10)

    popular = commands.add_parser("popular", help="Most booked origin/destination pairs.")
    popular.add_argument("--limit", type=int, default=10)

    pricing = commands.add_parser("pricing", help="Per-leg price breakdown for every route option.")
    pricing.add_argument("origin", type=_code)
    pricing.add_argument("destination", type=_code)

    path = commands.add_parser("path", help="Fewest-hop path over flights with free seats.")
    path.add_argument("origin", type=_code)
    path.add_argument("destination", type=_code)

    commands.add_parser("directory", help="Hash table statistics for the airport and flight indexes.")

    return parser.parse_args(list(argv))


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.log_level)
    try:
        options = {"simulate_bookings": False} if args.empty else {}
        if args.seed is not None:
            options["seed"] = args.seed
        network = dataset.build_sample_network(**options)
        return _COMMANDS[args.command](network, args)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
