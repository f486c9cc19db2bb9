"""Domain primitives: geodesy, route catalog and error taxonomy."""

from .errors import (
    EmptyResultError,
    FeedUnavailableError,
    MalformedRecordError,
    TransportError,
    UnknownRouteCodeError,
)
from .geo import bearing, clamp, dead_reckon, distance_km, interpolate
from .routes import Region, RouteCatalog, RoutePick

__all__ = [
    "EmptyResultError",
    "FeedUnavailableError",
    "MalformedRecordError",
    "Region",
    "RouteCatalog",
    "RoutePick",
    "TransportError",
    "UnknownRouteCodeError",
    "bearing",
    "clamp",
    "dead_reckon",
    "distance_km",
    "interpolate",
]
