"""Keep the known-flights collection in step with the map viewport.

The controller refreshes when the viewport settles on new bounds and on a
fixed polling period while bounds are known. Every refresh asks the live
feed first and falls back to the simulator when the feed fails, so the
controller always ends a refresh in ``READY`` with a usable collection.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging
import time
from typing import Callable

from skystream.config import settings
from skystream.domain.errors import FeedUnavailableError
from skystream.ingestors.opensky import OpenSkyIngestor
from skystream.models.flights import DataSource, FetchState, FlightRecord, ViewportBounds
from skystream.services.simulator import FlightSimulator

logger = logging.getLogger("skystream.services.fetch_controller")


class ViewportFetchController:
    """Idle → Loading → Ready state machine over feed and simulator."""

    def __init__(
        self,
        *,
        feed: OpenSkyIngestor | None = None,
        simulator: FlightSimulator | None = None,
        poll_interval: float | None = None,
        fetch_timeout: float | None = None,
        live_feed_enabled: bool | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.feed = feed or OpenSkyIngestor()
        self.simulator = simulator or FlightSimulator()
        self.poll_interval = poll_interval or settings.poll_interval_seconds
        self.fetch_timeout = fetch_timeout or settings.opensky_timeout
        self.live_feed_enabled = (
            settings.enable_live_feed if live_feed_enabled is None else live_feed_enabled
        )
        self.clock = clock or time.time

        self.state = FetchState.IDLE
        self.source = DataSource.NONE
        self.bounds: ViewportBounds | None = None
        self.known_flights: list[FlightRecord] = []
        self.last_updated: datetime | None = None
        self.sequence = 0
        self._pending = False

    async def set_viewport(self, bounds: ViewportBounds) -> bool:
        """Record settled viewport bounds; refresh if they changed."""

        if bounds == self.bounds:
            return False
        self.bounds = bounds
        logger.debug("Viewport changed to %s", bounds)
        await self.refresh()
        return True

    async def refresh(self) -> None:
        """Fetch for the current bounds, coalescing overlapping triggers.

        A call made while a fetch is in flight returns immediately and the
        running refresh performs one more fetch once it completes.
        """

        if self.state is FetchState.LOADING:
            self._pending = True
            return

        self._pending = True
        while self._pending:
            self._pending = False
            await self._fetch_once()

    async def run(self) -> None:
        """Poll on a fixed period until cancelled."""

        logger.info("Viewport polling started (every %ss)", self.poll_interval)
        while True:
            try:
                await asyncio.sleep(self.poll_interval)
                if self.bounds is not None:
                    await self.refresh()
            except asyncio.CancelledError:
                logger.info("Viewport polling cancelled")
                raise
            except Exception as exc:  # pragma: no cover - defensive logging
                logger.warning("Viewport poll failed: %s", exc)

    def find(self, flight_id: str) -> FlightRecord | None:
        for flight in self.known_flights:
            if flight.id == flight_id:
                return flight
        if self.source is DataSource.SIMULATED:
            return self.simulator.get(flight_id)
        return None

    async def _fetch_once(self) -> None:
        self.sequence += 1
        sequence = self.sequence
        bounds = self.bounds
        previous_state = self.state
        self.state = FetchState.LOADING

        try:
            flights, source = await self._load(bounds)
        except asyncio.CancelledError:
            # abandoned fetches apply nothing and leave the controller retriggerable
            logger.info("Fetch %s cancelled; keeping previous flights", sequence)
            self.state = previous_state
            self._pending = False
            raise

        self.known_flights = flights
        self.source = source
        self.last_updated = datetime.now(timezone.utc)
        self.state = FetchState.READY
        logger.info(
            "Fetch %s ready | source=%s | flights=%s", sequence, source.value, len(flights)
        )

    async def _load(
        self, bounds: ViewportBounds | None
    ) -> tuple[list[FlightRecord], DataSource]:
        try:
            return await self._fetch_live(bounds), DataSource.LIVE
        except FeedUnavailableError as exc:
            logger.info("Live feed unavailable (%s); serving simulated flights", exc)
        except Exception:
            logger.exception("Unexpected live feed failure; serving simulated flights")
        return self._fetch_simulated(bounds), DataSource.SIMULATED

    async def _fetch_live(self, bounds: ViewportBounds | None) -> list[FlightRecord]:
        if not self.live_feed_enabled:
            raise FeedUnavailableError("live feed disabled")
        return await self.feed.fetch(bounds, timeout=self.fetch_timeout)

    def _fetch_simulated(self, bounds: ViewportBounds | None) -> list[FlightRecord]:
        now = self.clock()
        self.simulator.ensure_population(now=now)
        flights = self.simulator.tick(now)
        if bounds is None:
            return flights
        return [flight for flight in flights if bounds.contains(flight.position)]


__all__ = ["ViewportFetchController"]
