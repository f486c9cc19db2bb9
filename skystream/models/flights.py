"""Flight, viewport and render models shared by the feed, simulator and API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DataSource(str, Enum):
    """Origin of the currently known flights."""

    NONE = "none"
    LIVE = "live"
    SIMULATED = "simulated"


class FetchState(str, Enum):
    """Lifecycle of the viewport fetch controller."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class Position(BaseModel):
    """Geographic point in decimal degrees."""

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


class FlightRoute(BaseModel):
    """Origin/destination leg flown by a simulated flight."""

    origin_code: str = Field(..., description="Catalog code of the departure airport")
    destination_code: str = Field(..., description="Catalog code of the arrival airport")
    origin: Position
    destination: Position
    departure_ts: float = Field(..., description="Departure time, epoch seconds")
    arrival_ts: float = Field(..., description="Arrival time, epoch seconds")

    @property
    def duration(self) -> float:
        return self.arrival_ts - self.departure_ts


class FlightRecord(BaseModel):
    """Normalized state of one tracked aircraft, live or simulated."""

    id: str = Field(..., description="Stable identity key (ICAO hex or simulated id)")
    callsign: Optional[str] = Field(default=None, description="Display callsign")
    country: Optional[str] = Field(default=None, description="Country or region")
    position: Position
    heading: float = Field(default=0.0, description="Track in degrees clockwise from north")
    altitude_m: float = Field(default=0.0, ge=0, description="Altitude in meters")
    ground_speed_mps: float = Field(
        default=0.0, ge=0, description="Ground speed in meters per second"
    )
    on_ground: bool = Field(default=False, description="Whether the aircraft is on the ground")
    route: Optional[FlightRoute] = Field(
        default=None, description="Route being flown, simulated flights only"
    )
    photo_url: Optional[str] = Field(default=None, description="Aircraft photo thumbnail")
    last_seen: Optional[float] = Field(
        default=None, description="Sample time of the position, epoch seconds"
    )

    model_config = ConfigDict(extra="ignore")


class ViewportBounds(BaseModel):
    """Rectangular geographic region currently visible on the map."""

    south: float
    west: float
    north: float
    east: float

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_order(self) -> "ViewportBounds":
        if not self.south < self.north:
            raise ValueError("south must be strictly less than north")
        return self

    def contains(self, position: Position) -> bool:
        return (
            self.south <= position.latitude <= self.north
            and self.west <= position.longitude <= self.east
        )

    def padded(self, fraction: float) -> "ViewportBounds":
        """Grow the box on every side by ``fraction`` of its span."""

        lat_pad = (self.north - self.south) * fraction
        lon_pad = (self.east - self.west) * fraction
        return ViewportBounds(
            south=self.south - lat_pad,
            west=self.west - lon_pad,
            north=self.north + lat_pad,
            east=self.east + lon_pad,
        )


class RenderPoint(BaseModel):
    """Per-frame record handed to the rendering client."""

    id: str
    latitude: float
    longitude: float
    heading: float
    is_selected: bool = False


class TrackPoint(BaseModel):
    """Historical position sample for a flight trail."""

    time: Optional[float] = Field(default=None, description="Sample time, epoch seconds")
    lat: float
    lon: float
    alt: Optional[float] = Field(default=None, description="Altitude in meters")


class FlightsResponse(BaseModel):
    """Render set for the current viewport."""

    source: DataSource
    state: FetchState
    count: int
    updated_at: Optional[datetime] = None
    flights: list[RenderPoint]


class PhotoResponse(BaseModel):
    id: str
    url: Optional[str] = None


__all__ = [
    "DataSource",
    "FetchState",
    "FlightRecord",
    "FlightRoute",
    "FlightsResponse",
    "PhotoResponse",
    "Position",
    "RenderPoint",
    "TrackPoint",
    "ViewportBounds",
]
