"""Optional per-flight enrichment: track history and aircraft photos.

Both lookups are best effort. Any failure yields an empty trail or no photo
so callers never have to handle errors from them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from skystream.config import settings
from skystream.models.flights import TrackPoint

logger = logging.getLogger("skystream.ingestors.enrichment")


def _parse_path(payload: Any) -> list[TrackPoint]:
    if not isinstance(payload, dict):
        return []

    points: list[TrackPoint] = []
    for sample in payload.get("path") or []:
        # [time, latitude, longitude, baro_altitude, true_track, on_ground]
        if not isinstance(sample, (list, tuple)) or len(sample) < 3:
            continue
        if sample[1] is None or sample[2] is None:
            continue
        try:
            points.append(
                TrackPoint(
                    time=sample[0],
                    lat=float(sample[1]),
                    lon=float(sample[2]),
                    alt=sample[3] if len(sample) > 3 else None,
                )
            )
        except (TypeError, ValueError):
            logger.debug("Skipping unreadable track sample: %s", sample)
    return points


class TrackHistoryIngestor:
    """Fetch the recent track of one aircraft from OpenSky."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.opensky_tracks_url
        self.timeout = timeout or settings.opensky_timeout
        self.transport = transport

    async def get_track(self, flight_id: str) -> list[TrackPoint]:
        params = {"icao24": flight_id, "time": 0}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.info(
                "No track for %s: HTTP %s", flight_id, exc.response.status_code
            )
            return []
        except httpx.RequestError as exc:
            logger.info("Track request for %s failed: %s", flight_id, exc)
            return []

        try:
            payload = response.json()
        except ValueError:
            logger.info("Track response for %s was not JSON", flight_id)
            return []

        return _parse_path(payload)


class PhotoIngestor:
    """Look up an aircraft thumbnail by ICAO hex."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.photo_base_url).rstrip("/")
        self.timeout = timeout or settings.photo_timeout
        self.transport = transport

    async def get_photo_url(self, flight_id: str) -> str | None:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(f"{self.base_url}/{flight_id}")
                response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.info("Photo lookup for %s failed: %s", flight_id, exc)
            return None

        photos = payload.get("photos") if isinstance(payload, dict) else None
        if not photos:
            return None
        try:
            return photos[0]["thumbnail_large"]["src"]
        except (KeyError, IndexError, TypeError):
            logger.debug("Unexpected photo payload for %s", flight_id)
            return None


__all__ = ["PhotoIngestor", "TrackHistoryIngestor"]
