"""Service-layer components for SkyStream."""

from .fetch_controller import ViewportFetchController
from .pruner import ViewportPruner, render_points
from .simulator import FlightPopulation, FlightSimulator

__all__ = [
    "FlightPopulation",
    "FlightSimulator",
    "ViewportFetchController",
    "ViewportPruner",
    "render_points",
]
