"""Live aircraft state vectors from the OpenSky Network REST API."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from skystream.config import settings
from skystream.domain.errors import EmptyResultError, MalformedRecordError, TransportError
from skystream.models.flights import FlightRecord, Position, ViewportBounds

logger = logging.getLogger("skystream.ingestors.opensky")

# icao24, callsign, origin_country, time_position, last_contact, longitude,
# latitude, baro_altitude, on_ground, velocity, true_track, ...
MIN_STATE_FIELDS = 11
GEO_ALTITUDE_INDEX = 13


def _to_float(value: Any, field: str) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(f"{field} is not numeric: {value!r}") from exc
    if not math.isfinite(number):
        raise MalformedRecordError(f"{field} is not finite: {value!r}")
    return number


def bounds_params(bounds: ViewportBounds | None) -> dict[str, float]:
    """OpenSky bounding-box query parameters for ``bounds``."""

    if bounds is None:
        return {}
    return {
        "lamin": bounds.south,
        "lomin": bounds.west,
        "lamax": bounds.north,
        "lomax": bounds.east,
    }


def normalize_state(entry: Any) -> Optional[FlightRecord]:
    """Map one OpenSky state vector to a ``FlightRecord``.

    Returns ``None`` for aircraft on the ground or without a position and
    raises ``MalformedRecordError`` for vectors that cannot be read.
    """

    if not isinstance(entry, (list, tuple)) or len(entry) < MIN_STATE_FIELDS:
        raise MalformedRecordError("state vector has too few columns")

    icao = entry[0]
    if not icao:
        raise MalformedRecordError("state vector has no icao24")

    on_ground = bool(entry[8])
    lon = _to_float(entry[5], "longitude")
    lat = _to_float(entry[6], "latitude")
    # zero coordinates are treated as missing, matching the feed's placeholder rows
    if on_ground or not lat or not lon:
        return None

    altitude_m = _to_float(entry[7], "baro_altitude")
    if altitude_m is None and len(entry) > GEO_ALTITUDE_INDEX:
        altitude_m = _to_float(entry[GEO_ALTITUDE_INDEX], "geo_altitude")
    velocity = _to_float(entry[9], "velocity")
    track = _to_float(entry[10], "true_track")
    last_contact = _to_float(entry[4], "last_contact")

    callsign = entry[1].strip() if isinstance(entry[1], str) else None

    try:
        return FlightRecord(
            id=str(icao).strip().lower(),
            callsign=callsign or None,
            country=entry[2] or None,
            position=Position(latitude=lat, longitude=lon),
            heading=(track or 0.0) % 360.0,
            altitude_m=max(altitude_m or 0.0, 0.0),
            ground_speed_mps=max(velocity or 0.0, 0.0),
            on_ground=False,
            last_seen=last_contact,
        )
    except ValidationError as exc:
        raise MalformedRecordError(f"state vector {icao!r} failed validation") from exc


class OpenSkyIngestor:
    """Fetch airborne aircraft inside a viewport from the OpenSky feed."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.opensky_base_url
        self.timeout = timeout or settings.opensky_timeout
        self.transport = transport

    async def fetch(
        self, bounds: ViewportBounds | None = None, timeout: float | None = None
    ) -> list[FlightRecord]:
        """Return airborne flights within ``bounds``.

        Raises ``TransportError`` when the request fails and
        ``EmptyResultError`` when it succeeds with nothing usable. The feed
        answers rate-limited requests with empty payloads, so an empty world
        is never a valid live result.
        """

        params = bounds_params(bounds)
        try:
            async with httpx.AsyncClient(
                timeout=timeout or self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("OpenSky request timed out: %s", exc)
            raise TransportError("OpenSky request timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("OpenSky request failed: %s", exc)
            raise TransportError("OpenSky request failed") from exc

        if response.status_code == 429:
            logger.warning("OpenSky rate limit encountered: %s", response.text)
            raise TransportError("OpenSky rate limited", status_code=429)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "OpenSky returned HTTP %s: %s", exc.response.status_code, exc
            )
            raise TransportError(
                "OpenSky returned an error status", status_code=exc.response.status_code
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse OpenSky JSON response: %s", exc)
            raise TransportError("OpenSky returned invalid JSON") from exc

        raw_states = []
        if isinstance(payload, dict):
            raw_states = payload.get("states") or []

        flights: list[FlightRecord] = []
        malformed = 0
        for entry in raw_states:
            try:
                flight = normalize_state(entry)
            except MalformedRecordError as exc:
                malformed += 1
                logger.debug("Dropping malformed state vector: %s", exc)
                continue
            if flight is not None:
                flights.append(flight)

        if malformed:
            logger.debug("Dropped %s malformed state vectors", malformed)
        if not flights:
            raise EmptyResultError(
                f"OpenSky returned no usable aircraft ({len(raw_states)} raw vectors)"
            )

        logger.debug("Ingested %s live aircraft", len(flights))
        return flights


__all__ = ["OpenSkyIngestor", "bounds_params", "normalize_state"]
