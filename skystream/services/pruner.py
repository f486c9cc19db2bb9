"""Reduce the known flights to the ones worth drawing for a viewport."""

from __future__ import annotations

import logging
from typing import Sequence

from skystream.config import settings
from skystream.models.flights import FlightRecord, RenderPoint, ViewportBounds

logger = logging.getLogger("skystream.services.pruner")


class ViewportPruner:
    """Padded-viewport filter, memoized on its last inputs.

    The known-flights list is compared by identity (the controller replaces
    it wholesale on every fetch) and the bounds by value.
    """

    def __init__(self, padding: float | None = None) -> None:
        self.padding = settings.viewport_padding if padding is None else padding
        self._last_known: Sequence[FlightRecord] | None = None
        self._last_bounds: ViewportBounds | None = None
        self._last_result: list[FlightRecord] = []

    def visible(
        self, known: Sequence[FlightRecord], bounds: ViewportBounds | None
    ) -> list[FlightRecord]:
        if known is self._last_known and bounds == self._last_bounds:
            return self._last_result

        if bounds is None:
            result = [flight for flight in known if flight.position.is_finite()]
        else:
            padded = bounds.padded(self.padding)
            result = [
                flight
                for flight in known
                if flight.position.is_finite() and padded.contains(flight.position)
            ]

        self._last_known = known
        self._last_bounds = bounds
        self._last_result = result
        logger.debug("Visible flights: %s of %s", len(result), len(known))
        return result


def render_points(
    flights: Sequence[FlightRecord], selected_id: str | None = None
) -> list[RenderPoint]:
    return [
        RenderPoint(
            id=flight.id,
            latitude=flight.position.latitude,
            longitude=flight.position.longitude,
            heading=flight.heading,
            is_selected=flight.id == selected_id,
        )
        for flight in flights
    ]


__all__ = ["ViewportPruner", "render_points"]
