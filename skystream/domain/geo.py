"""Great-circle bearing and distance primitives.

Positions between two endpoints are blended linearly in degrees rather than
along the great circle. Headings still come from the spherical forward
azimuth, so a long leg drawn on the map is a straight line in lat/lon while
the aircraft symbol points along the true initial course.
"""

from __future__ import annotations

import math

from skystream.models.flights import Position

EARTH_RADIUS_KM = 6371.0

# Flat-earth meters per degree of latitude, for dead reckoning steps.
METERS_PER_DEGREE = 111320.0


def bearing(a: Position, b: Position) -> float:
    """Forward azimuth from ``a`` to ``b`` in degrees [0, 360)."""

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        d_lambda
    )
    theta = math.degrees(math.atan2(y, x))
    if theta < 0:
        theta += 360.0
    # tiny negative angles round up to exactly 360.0
    return theta % 360.0


def distance_km(a: Position, b: Position) -> float:
    """Haversine distance between ``a`` and ``b`` in kilometers."""

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def interpolate(a: Position, b: Position, fraction: float) -> Position:
    """Linear blend of two positions in degree space."""

    return Position(
        latitude=a.latitude + (b.latitude - a.latitude) * fraction,
        longitude=a.longitude + (b.longitude - a.longitude) * fraction,
    )


def dead_reckon(
    position: Position, heading_deg: float, speed_mps: float, elapsed_s: float
) -> Position:
    """Project ``position`` along ``heading_deg`` with a flat-earth step.

    Δlat = v·t·cos(track) / 111320
    Δlon = v·t·sin(track) / (111320·cos(lat))
    """

    if speed_mps <= 0 or elapsed_s <= 0:
        return Position(latitude=position.latitude, longitude=position.longitude)

    track = math.radians(heading_deg)
    distance_m = speed_mps * elapsed_s
    delta_lat = distance_m * math.cos(track) / METERS_PER_DEGREE
    cos_lat = max(math.cos(math.radians(position.latitude)), 0.01)
    delta_lon = distance_m * math.sin(track) / (METERS_PER_DEGREE * cos_lat)

    latitude = clamp(position.latitude + delta_lat, -89.9, 89.9)
    longitude = (position.longitude + delta_lon + 180.0) % 360.0 - 180.0
    return Position(latitude=latitude, longitude=longitude)


__all__ = [
    "EARTH_RADIUS_KM",
    "bearing",
    "clamp",
    "dead_reckon",
    "distance_km",
    "interpolate",
]
