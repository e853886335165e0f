"""FastAPI application exposing search, reservations and reports."""
from __future__ import annotations

from dataclasses import asdict
from io import BytesIO, StringIO
from typing import Any, Dict, List, Literal, Optional

import pandas as pd
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from . import analytics
from .dataset import build_sample_network
from .graph import AirportNotFoundError
from .models import Airport, Flight
from .network import CancellationOutcome, FlightNetwork
from .reservations import Reservation
from .routes import Route


class ReservationRequest(BaseModel):
    origin: str
    destination: str
    passenger_count: int = Field(..., gt=0)
    option: int = Field(1, ge=1, description="1-based index into the search results")
    customer_email: Optional[str] = None
    passenger_names: List[str] = Field(default_factory=list)


def _airport_payload(airport: Airport) -> Dict[str, str]:
    return {"code": airport.code, "name": airport.name, "location": airport.location}


def _flight_payload(flight: Flight) -> Dict[str, Any]:
    return {
        "flight_number": flight.flight_number,
        "origin": flight.origin.code,
        "destination": flight.destination.code,
        "date": flight.flight_date.isoformat() if flight.flight_date else None,
        "total_seats": flight.total_seats,
        "available_seats": flight.available_seats,
        "base_price": flight.base_price,
        "current_price": round(flight.current_price, 2),
    }


def _route_payload(route: Route) -> Dict[str, Any]:
    return {
        "origin": route.origin.code,
        "destination": route.destination.code,
        "type": route.stops_label,
        "total_price": round(route.total_price, 2),
        "duration_minutes": route.total_duration,
        "duration": route.formatted_duration,
        "flights": [_flight_payload(flight) for flight in route.flights],
    }


def _reservation_payload(reservation: Reservation) -> Dict[str, Any]:
    return {
        "id": reservation.reservation_id,
        "status": reservation.status.name,
        "passenger_count": reservation.passenger_count,
        "total_cost": round(reservation.total_cost, 2),
        "customer_email": reservation.customer_email,
        "passenger_names": reservation.passenger_names,
        "refund_amount": round(reservation.refund_amount(), 2),
        "route": _route_payload(reservation.route),
    }


def create_app(network: Optional[FlightNetwork] = None) -> FastAPI:
    """Return an application bound to ``network`` (the demo network by default).

    Endpoints are plain functions, so FastAPI runs them on its worker thread
    pool; seat bookings rely on the per-flight locks for consistency.
    """

    network = network or build_sample_network()
    app = FastAPI(title="Flightnet", description="Flight search and reservations with dynamic pricing")

    def _search(origin: str, destination: str, passengers: Optional[int]) -> List[Route]:
        try:
            return network.search_routes(origin.upper(), destination.upper(), passengers)
        except AirportNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    def _get(reservation_id: int) -> Reservation:
        reservation = network.get_reservation(reservation_id)
        if reservation is None:
            raise HTTPException(status_code=404, detail=f"Reservation not found: #{reservation_id}")
        return reservation

    @app.get("/airports")
    def list_airports() -> List[Dict[str, str]]:
        airports = sorted(network.graph.airports(), key=lambda airport: airport.code)
        return [_airport_payload(airport) for airport in airports]

    @app.get("/routes")
    def search_routes(
        origin: str = Query(..., description="Origin airport code"),
        destination: str = Query(..., description="Destination airport code"),
        passengers: Optional[int] = Query(None, description="Only routes with this many free seats"),
    ) -> List[Dict[str, Any]]:
        return [_route_payload(route) for route in _search(origin, destination, passengers)]

    @app.post("/reservations", status_code=201)
    def create_reservation(payload: ReservationRequest) -> Dict[str, Any]:
        routes = _search(payload.origin, payload.destination, payload.passenger_count)
        if payload.option > len(routes):
            raise HTTPException(status_code=409, detail="No route with enough free seats for that option")
        try:
            reservation = network.make_reservation(
                routes[payload.option - 1],
                payload.passenger_count,
                customer_email=payload.customer_email,
                passenger_names=payload.passenger_names,
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if reservation is None:
            raise HTTPException(status_code=409, detail="Insufficient seats available")
        return _reservation_payload(reservation)

    @app.get("/reservations/{reservation_id}")
    def get_reservation(reservation_id: int) -> Dict[str, Any]:
        return _reservation_payload(_get(reservation_id))

    @app.delete("/reservations/{reservation_id}")
    def cancel_reservation(reservation_id: int) -> Dict[str, Any]:
        result = network.cancel_reservation(reservation_id)
        if result.outcome is CancellationOutcome.NOT_FOUND:
            raise HTTPException(status_code=404, detail=result.message)
        if result.outcome is CancellationOutcome.INVALID_STATUS:
            raise HTTPException(status_code=409, detail=result.message)
        return _reservation_payload(_get(reservation_id))

    @app.post("/reservations/{reservation_id}/complete")
    def complete_reservation(reservation_id: int) -> Dict[str, Any]:
        reservation = _get(reservation_id)
        if not reservation.complete():
            raise HTTPException(
                status_code=409,
                detail=f"Cannot complete reservation #{reservation_id} - Status: {reservation.status.name}",
            )
        return _reservation_payload(reservation)

    @app.get("/statistics")
    def statistics() -> Dict[str, Any]:
        stats = analytics.network_statistics(network)
        return {
            "network": asdict(stats),
            "popular_routes": [
                {"route": route, "bookings": count} for route, count in analytics.popular_routes(network)
            ],
        }

    @app.get("/download/{file_format}")
    def download(file_format: Literal["csv", "xlsx"]) -> StreamingResponse:
        dataframe = analytics.flights_dataframe(network)
        headers = {"Content-Disposition": f"attachment; filename=\"flights.{file_format}\""}

        if file_format == "csv":
            buffer = StringIO()
            dataframe.to_csv(buffer, index=False)
            buffer.seek(0)
            return StreamingResponse(iter([buffer.getvalue()]), media_type="text/csv", headers=headers)

        binary = BytesIO()
        with pd.ExcelWriter(binary, engine="openpyxl") as writer:
            dataframe.to_excel(writer, index=False, sheet_name="Flights")
        binary.seek(0)
        return StreamingResponse(
            binary,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers=headers,
        )

    return app


__all__ = ["ReservationRequest", "create_app"]
