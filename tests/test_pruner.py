import math

import pytest

from skystream.models.flights import FlightRecord, Position, ViewportBounds
from skystream.services.pruner import ViewportPruner, render_points

BOX = ViewportBounds(south=0.0, west=0.0, north=10.0, east=10.0)


def _flight(flight_id: str, lat: float, lon: float, heading: float = 45.0) -> FlightRecord:
    return FlightRecord(
        id=flight_id, position=Position(latitude=lat, longitude=lon), heading=heading
    )


def test_visible_uses_padded_bounds():
    known = [
        _flight("inside", 5.0, 5.0),
        _flight("outside", -5.0, -5.0),
        _flight("margin", -0.5, -0.5),
        _flight("far-margin", 10.9, 10.9),
        _flight("just-out", 11.1, 5.0),
    ]

    visible = ViewportPruner(padding=0.1).visible(known, BOX)

    assert [flight.id for flight in visible] == ["inside", "margin", "far-margin"]


def test_visible_excludes_non_finite_positions():
    known = [_flight("ok", 5.0, 5.0), _flight("bad", math.nan, 5.0), _flight("inf", 5.0, math.inf)]

    assert [f.id for f in ViewportPruner().visible(known, BOX)] == ["ok"]
    assert [f.id for f in ViewportPruner().visible(known, None)] == ["ok"]


def test_visible_is_memoized_on_inputs():
    pruner = ViewportPruner(padding=0.1)
    known = [_flight("a", 5.0, 5.0)]

    first = pruner.visible(known, BOX)
    again = pruner.visible(known, ViewportBounds(south=0.0, west=0.0, north=10.0, east=10.0))
    assert again is first

    replaced = list(known)
    assert pruner.visible(replaced, BOX) is not first

    moved = pruner.visible(replaced, ViewportBounds(south=20.0, west=20.0, north=30.0, east=30.0))
    assert moved == []


def test_padded_bounds_span():
    padded = BOX.padded(0.1)

    assert (padded.south, padded.west, padded.north, padded.east) == pytest.approx(
        (-1.0, -1.0, 11.0, 11.0)
    )


def test_bounds_require_south_below_north():
    with pytest.raises(ValueError):
        ViewportBounds(south=10.0, west=0.0, north=0.0, east=10.0)


def test_render_points_mark_selection():
    flights = [_flight("a", 1.0, 2.0, heading=90.0), _flight("b", 3.0, 4.0)]

    points = render_points(flights, selected_id="b")

    assert [(p.id, p.latitude, p.longitude, p.is_selected) for p in points] == [
        ("a", 1.0, 2.0, False),
        ("b", 3.0, 4.0, True),
    ]
    assert points[0].heading == 90.0
