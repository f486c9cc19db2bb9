"""Render-set and per-flight endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from skystream.models import (
    FetchState,
    FlightRecord,
    FlightsResponse,
    PhotoResponse,
    TrackPoint,
    ViewportBounds,
)
from skystream.services import ViewportFetchController, ViewportPruner, render_points

router = APIRouter(prefix="/api/v1", tags=["flights"])

logger = logging.getLogger("skystream.api.flights")


def _controller(request: Request) -> ViewportFetchController:
    return request.app.state.controller


def _pruner(request: Request) -> ViewportPruner:
    return request.app.state.pruner


def _parse_bounds(
    south: float | None, west: float | None, north: float | None, east: float | None
) -> ViewportBounds | None:
    values = (south, west, north, east)
    if all(value is None for value in values):
        return None
    if any(value is None for value in values):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="south, west, north and east must be given together",
        )
    try:
        return ViewportBounds(south=south, west=west, north=north, east=east)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="invalid viewport bounds"
        ) from exc


def _require_flight(controller: ViewportFetchController, flight_id: str) -> FlightRecord:
    flight = controller.find(flight_id)
    if flight is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown flight {flight_id}"
        )
    return flight


@router.get(
    "/flights",
    response_model=FlightsResponse,
    summary="Flights to render for the current viewport",
)
async def list_flights(
    request: Request,
    south: Optional[float] = Query(default=None, ge=-90, le=90),
    west: Optional[float] = Query(default=None, ge=-180, le=180),
    north: Optional[float] = Query(default=None, ge=-90, le=90),
    east: Optional[float] = Query(default=None, ge=-180, le=180),
    selected: Optional[str] = Query(default=None, description="Selected flight id"),
) -> FlightsResponse:
    """Update the viewport when bounds are given and return the padded render set."""

    controller = _controller(request)
    bounds = _parse_bounds(south, west, north, east)
    if bounds is not None:
        await controller.set_viewport(bounds)
    elif controller.state is FetchState.IDLE:
        await controller.refresh()

    visible = _pruner(request).visible(controller.known_flights, controller.bounds)
    return FlightsResponse(
        source=controller.source,
        state=controller.state,
        count=len(visible),
        updated_at=controller.last_updated,
        flights=render_points(visible, selected),
    )


@router.get(
    "/flights/{flight_id}",
    response_model=FlightRecord,
    summary="Full state of one known flight",
)
async def get_flight(flight_id: str, request: Request) -> FlightRecord:
    return _require_flight(_controller(request), flight_id)


@router.get(
    "/flights/{flight_id}/track",
    response_model=list[TrackPoint],
    summary="Trail for one flight",
)
async def get_flight_track(flight_id: str, request: Request) -> list[TrackPoint]:
    """Historical track, or the current position when no history exists."""

    track = await request.app.state.track_ingestor.get_track(flight_id)
    if track:
        return track

    flight = _controller(request).find(flight_id)
    if flight is None:
        return []
    return [
        TrackPoint(
            time=flight.last_seen,
            lat=flight.position.latitude,
            lon=flight.position.longitude,
            alt=flight.altitude_m,
        )
    ]


@router.get(
    "/flights/{flight_id}/photo",
    response_model=PhotoResponse,
    summary="Aircraft photo thumbnail",
)
async def get_flight_photo(flight_id: str, request: Request) -> PhotoResponse:
    url = await request.app.state.photo_ingestor.get_photo_url(flight_id)
    flight = _controller(request).find(flight_id)
    if flight is not None and url:
        flight.photo_url = url
    logger.debug("Photo for %s: %s", flight_id, url)
    return PhotoResponse(id=flight_id, url=url)
