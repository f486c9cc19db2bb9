import random

import pytest

from skystream.domain.routes import RouteCatalog
from skystream.models.flights import FlightRecord, FlightRoute, Position
from skystream.services.simulator import FlightPopulation, FlightSimulator

NOW = 1_714_765_200.0

LHR = Position(latitude=51.47, longitude=-0.4543)
JFK = Position(latitude=40.6413, longitude=-73.7781)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def catalog():
    return RouteCatalog()


@pytest.fixture
def make_simulator(rng, catalog):
    def factory(**kwargs):
        kwargs.setdefault("rng", rng)
        kwargs.setdefault("catalog", catalog)
        kwargs.setdefault("cruise_kmh", 850.0)
        kwargs.setdefault("clock", lambda: NOW)
        return FlightSimulator(**kwargs)

    return factory


def routed_flight(
    flight_id="test01",
    origin=LHR,
    destination=JFK,
    departure_ts=NOW,
    duration=1800.0,
    origin_code="LHR",
    destination_code="JFK",
):
    return FlightRecord(
        id=flight_id,
        callsign="BAW123",
        country="International",
        position=origin.model_copy(),
        altitude_m=11000.0,
        ground_speed_mps=850.0 / 3.6,
        route=FlightRoute(
            origin_code=origin_code,
            destination_code=destination_code,
            origin=origin,
            destination=destination,
            departure_ts=departure_ts,
            arrival_ts=departure_ts + duration,
        ),
    )


@pytest.fixture
def single_flight_population():
    population = FlightPopulation()
    population.add(routed_flight())
    return population
