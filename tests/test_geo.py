import pytest

from skystream.domain.geo import bearing, clamp, dead_reckon, distance_km, interpolate
from skystream.models.flights import Position

from .conftest import JFK, LHR


def test_bearing_cardinal_directions():
    origin = Position(latitude=0.0, longitude=0.0)

    assert bearing(origin, Position(latitude=0.0, longitude=90.0)) == pytest.approx(90.0)
    assert bearing(origin, Position(latitude=90.0, longitude=0.0)) == pytest.approx(0.0)
    assert bearing(origin, Position(latitude=0.0, longitude=-90.0)) == pytest.approx(270.0)
    assert bearing(origin, Position(latitude=-10.0, longitude=0.0)) == pytest.approx(180.0)


def test_bearing_lhr_to_jfk_is_westward():
    result = bearing(LHR, JFK)

    assert 260.0 < result < 290.0


def test_bearing_is_always_in_range():
    samples = [
        (Position(latitude=10.0, longitude=170.0), Position(latitude=-20.0, longitude=-170.0)),
        (Position(latitude=-45.0, longitude=10.0), Position(latitude=-45.0, longitude=9.999)),
        (JFK, LHR),
    ]
    for a, b in samples:
        assert 0.0 <= bearing(a, b) < 360.0


def test_distance_to_self_is_zero():
    assert distance_km(LHR, LHR) == 0.0


def test_distance_lhr_jfk():
    assert 5500.0 < distance_km(LHR, JFK) < 5700.0
    assert distance_km(LHR, JFK) == pytest.approx(distance_km(JFK, LHR))


def test_interpolate_is_linear_in_degrees():
    point = interpolate(LHR, JFK, 0.25)

    assert point.latitude == pytest.approx(51.47 + (40.6413 - 51.47) * 0.25, abs=1e-9)
    assert point.longitude == pytest.approx(-0.4543 + (-73.7781 + 0.4543) * 0.25, abs=1e-9)


def test_clamp():
    assert clamp(-0.5, 0.0, 1.0) == 0.0
    assert clamp(1.5, 0.0, 1.0) == 1.0
    assert clamp(0.3, 0.0, 1.0) == 0.3


def test_dead_reckon_moves_north_at_speed():
    start = Position(latitude=0.0, longitude=0.0)

    moved = dead_reckon(start, 0.0, 111.32, 1000.0)

    assert moved.latitude == pytest.approx(1.0)
    assert moved.longitude == pytest.approx(0.0)


def test_dead_reckon_without_speed_stays_put():
    start = Position(latitude=12.0, longitude=34.0)

    assert dead_reckon(start, 90.0, 0.0, 600.0) == start
