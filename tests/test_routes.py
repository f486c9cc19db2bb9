import random

import pytest

from skystream.domain.routes import AIRPORTS, REGIONS, Region, RouteCatalog


def test_coordinate_of_known_and_unknown_codes(catalog):
    lhr = catalog.coordinate_of("LHR")

    assert lhr is not None
    assert lhr.latitude == pytest.approx(51.47)
    assert lhr.longitude == pytest.approx(-0.4543)
    assert catalog.coordinate_of("ZZZ") is None


def test_every_region_airport_has_a_coordinate():
    for region in REGIONS:
        for code in region.airports:
            assert code in AIRPORTS


def test_pick_route_never_returns_same_origin_and_destination(catalog, rng):
    for _ in range(500):
        pick = catalog.pick_route(rng)
        assert pick.origin != pick.destination
        assert pick.operators


def test_pick_route_mixes_domestic_and_international(catalog, rng):
    domestic = 0
    total = 1000
    for _ in range(total):
        pick = catalog.pick_route(rng)
        region = catalog.region_of(pick.origin)
        if pick.operators == region.operators:
            domestic += 1
            assert pick.destination in region.airports
        else:
            assert pick.operators == catalog.global_operators

    assert 0.4 < domestic / total < 0.6


def test_pick_route_is_deterministic_for_a_seed(catalog):
    rng_a = random.Random(42)
    rng_b = random.Random(42)

    picks_a = [catalog.pick_route(rng_a) for _ in range(20)]
    picks_b = [catalog.pick_route(rng_b) for _ in range(20)]

    assert picks_a == picks_b


def test_pick_destination_differs_from_origin(catalog, rng):
    for _ in range(200):
        assert catalog.pick_destination("JFK", rng) != "JFK"


def test_global_operators_merge_regions_without_duplicates():
    catalog = RouteCatalog(
        airports={"AAA": (0.0, 0.0), "BBB": (1.0, 1.0)},
        regions=[
            Region("one", ("AAA", "BBB"), ("XAA", "XBB")),
            Region("two", ("AAA", "BBB"), ("XBB", "XCC")),
        ],
    )

    assert catalog.global_operators == ("XAA", "XBB", "XCC")


def test_catalog_requires_two_airports():
    with pytest.raises(ValueError):
        RouteCatalog(airports={"AAA": (0.0, 0.0)}, regions=[])
