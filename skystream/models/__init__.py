"""Pydantic models for the SkyStream backend."""

from .flights import (
    DataSource,
    FetchState,
    FlightRecord,
    FlightRoute,
    FlightsResponse,
    PhotoResponse,
    Position,
    RenderPoint,
    TrackPoint,
    ViewportBounds,
)

__all__ = [
    "DataSource",
    "FetchState",
    "FlightRecord",
    "FlightRoute",
    "FlightsResponse",
    "PhotoResponse",
    "Position",
    "RenderPoint",
    "TrackPoint",
    "ViewportBounds",
]
