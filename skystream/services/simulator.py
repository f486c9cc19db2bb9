"""Simulated flight population used when the live feed is unavailable.

Every simulated flight flies a straight (in degree space) leg between two
catalog airports at a constant cruise speed. Positions are a pure function
of wall-clock time: the elapsed fraction of the leg's duration, clamped to
[0, 1], blends origin and destination. A flight past its arrival time is
respawned in place, keeping its id, on a new leg that departs from the
airport it just reached.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterator

from skystream.config import settings
from skystream.domain import geo
from skystream.domain.errors import UnknownRouteCodeError
from skystream.domain.routes import RouteCatalog
from skystream.models.flights import FlightRecord, FlightRoute, Position

logger = logging.getLogger("skystream.services.simulator")

CRUISE_ALTITUDE_M = (9000.0, 12500.0)
SPAWN_PROGRESS = (0.1, 0.9)
# Catalog codes can share a coordinate; keep every leg strictly positive.
MIN_LEG_SECONDS = 60.0


class FlightPopulation:
    """Owned mapping of simulated flight id to its mutable record."""

    def __init__(self) -> None:
        self._flights: dict[str, FlightRecord] = {}

    def __len__(self) -> int:
        return len(self._flights)

    def __iter__(self) -> Iterator[FlightRecord]:
        return iter(self._flights.values())

    def __contains__(self, flight_id: object) -> bool:
        return flight_id in self._flights

    def is_empty(self) -> bool:
        return not self._flights

    def ids(self) -> list[str]:
        return list(self._flights)

    def get(self, flight_id: str) -> FlightRecord | None:
        return self._flights.get(flight_id)

    def add(self, flight: FlightRecord) -> None:
        if flight.id in self._flights:
            raise ValueError(f"duplicate flight id {flight.id!r}")
        self._flights[flight.id] = flight


class FlightSimulator:
    """Populate, advance and respawn a population of simulated flights."""

    def __init__(
        self,
        *,
        population: FlightPopulation | None = None,
        catalog: RouteCatalog | None = None,
        rng: random.Random | None = None,
        cruise_kmh: float | None = None,
        default_size: int | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.population = population if population is not None else FlightPopulation()
        self.catalog = catalog or RouteCatalog()
        if rng is None:
            rng = random.Random(settings.sim_seed)
        self.rng = rng
        self.cruise_kmh = cruise_kmh or settings.sim_cruise_kmh
        self.default_size = default_size or settings.sim_population
        self.clock = clock or time.time

    @property
    def cruise_mps(self) -> float:
        return self.cruise_kmh / 3.6

    def ensure_population(self, n: int | None = None, now: float | None = None) -> int:
        """Generate ``n`` flights the first time; later calls are no-ops.

        Returns the population size.
        """

        if not self.population.is_empty():
            return len(self.population)

        count = self.default_size if n is None else n
        now = self.clock() if now is None else now
        for index in range(count):
            self.population.add(self._spawn(f"sim{index:05x}", now))

        logger.info("Generated simulated population of %s flights", len(self.population))
        return len(self.population)

    def tick(self, now: float | None = None) -> list[FlightRecord]:
        """Advance every flight to ``now`` and return independent copies."""

        now = self.clock() if now is None else now
        respawned = 0
        for flight in self.population:
            route = flight.route
            if route is None:
                self._dead_reckon(flight, now)
            elif now > route.arrival_ts:
                self._respawn(flight, route, now)
                respawned += 1
            else:
                self._advance(flight, route, now)
            flight.last_seen = now

        if respawned:
            logger.debug("Respawned %s completed flights", respawned)
        return [flight.model_copy(deep=True) for flight in self.population]

    def get(self, flight_id: str) -> FlightRecord | None:
        flight = self.population.get(flight_id)
        return flight.model_copy(deep=True) if flight is not None else None

    def _spawn(self, flight_id: str, now: float) -> FlightRecord:
        pick = self.catalog.pick_route(self.rng)
        region = self.catalog.region_of(pick.origin)
        domestic = region is not None and pick.destination in region.airports
        flight = FlightRecord(
            id=flight_id,
            callsign=f"{self.rng.choice(pick.operators)}{self.rng.randint(100, 999)}",
            country=region.name if domestic and region else "International",
            position=Position(latitude=0.0, longitude=0.0),
            altitude_m=self.rng.uniform(*CRUISE_ALTITUDE_M),
            ground_speed_mps=self.cruise_mps,
            on_ground=False,
            last_seen=now,
        )

        try:
            origin = self._coordinate(pick.origin)
            progress = self.rng.uniform(*SPAWN_PROGRESS)
            self._assign_route(flight, pick.origin, origin, pick.destination, now, progress)
        except UnknownRouteCodeError as exc:
            logger.warning(
                "No coordinate for route code %s; %s flies without a route", exc.code, flight_id
            )
            flight.position = Position(
                latitude=self.rng.uniform(-60.0, 70.0),
                longitude=self.rng.uniform(-180.0, 180.0),
            )
            flight.heading = self.rng.uniform(0.0, 360.0)
        return flight

    def _respawn(self, flight: FlightRecord, previous: FlightRoute, now: float) -> None:
        origin_code = previous.destination_code
        destination_code = self.catalog.pick_destination(origin_code, self.rng)
        try:
            self._assign_route(
                flight, origin_code, previous.destination, destination_code, now, 0.0
            )
        except UnknownRouteCodeError as exc:
            logger.warning(
                "No coordinate for route code %s; %s continues without a route",
                exc.code,
                flight.id,
            )
            flight.route = None
            flight.position = previous.destination.model_copy()
            flight.heading = self.rng.uniform(0.0, 360.0)

    def _assign_route(
        self,
        flight: FlightRecord,
        origin_code: str,
        origin: Position,
        destination_code: str,
        now: float,
        progress: float,
    ) -> None:
        destination = self._coordinate(destination_code)
        distance = geo.distance_km(origin, destination)
        duration = max(distance / self.cruise_kmh * 3600.0, MIN_LEG_SECONDS)
        departure = now - progress * duration

        flight.route = FlightRoute(
            origin_code=origin_code,
            destination_code=destination_code,
            origin=origin.model_copy(),
            destination=destination,
            departure_ts=departure,
            arrival_ts=departure + duration,
        )
        if progress > 0:
            flight.position = geo.interpolate(origin, destination, progress)
            flight.heading = geo.bearing(flight.position, destination)
        else:
            flight.position = origin.model_copy()
            flight.heading = geo.bearing(origin, destination)

    def _advance(self, flight: FlightRecord, route: FlightRoute, now: float) -> None:
        fraction = geo.clamp((now - route.departure_ts) / route.duration, 0.0, 1.0)
        flight.position = geo.interpolate(route.origin, route.destination, fraction)
        if fraction < 1.0:
            flight.heading = geo.bearing(flight.position, route.destination)

    def _dead_reckon(self, flight: FlightRecord, now: float) -> None:
        last = flight.last_seen if flight.last_seen is not None else now
        flight.position = geo.dead_reckon(
            flight.position, flight.heading, flight.ground_speed_mps, now - last
        )

    def _coordinate(self, code: str) -> Position:
        position = self.catalog.coordinate_of(code)
        if position is None:
            raise UnknownRouteCodeError(code)
        return position


__all__ = ["FlightPopulation", "FlightSimulator"]
