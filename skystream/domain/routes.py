"""Static airport registry and route picking for the fallback simulation."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import random
from typing import Mapping, Sequence

from skystream.models.flights import Position

logger = logging.getLogger("skystream.domain.routes")


@dataclass(frozen=True)
class Region:
    """A group of airports that share domestic traffic and operators."""

    name: str
    airports: tuple[str, ...]
    operators: tuple[str, ...]


@dataclass(frozen=True)
class RoutePick:
    """Origin/destination pair plus the callsign prefixes that fly it."""

    origin: str
    destination: str
    operators: tuple[str, ...]


AIRPORTS: dict[str, tuple[float, float]] = {
    # North America
    "JFK": (40.6413, -73.7781),
    "LAX": (33.9416, -118.4085),
    "ORD": (41.9742, -87.9073),
    "ATL": (33.6407, -84.4277),
    "DFW": (32.8998, -97.0403),
    "SFO": (37.6213, -122.3790),
    "SEA": (47.4502, -122.3088),
    "MIA": (25.7959, -80.2870),
    "DEN": (39.8561, -104.6737),
    "BOS": (42.3656, -71.0096),
    "YYZ": (43.6777, -79.6248),
    "YVR": (49.1967, -123.1815),
    "ANC": (61.1743, -149.9962),
    # Europe
    "LHR": (51.4700, -0.4543),
    "CDG": (49.0097, 2.5479),
    "AMS": (52.3105, 4.7683),
    "FRA": (50.0379, 8.5622),
    "MAD": (40.4983, -3.5676),
    "FCO": (41.8003, 12.2389),
    "MUC": (48.3537, 11.7750),
    "ZRH": (47.4582, 8.5555),
    "IST": (41.2753, 28.7519),
    "KEF": (63.9850, -22.6056),
    "SVO": (55.9726, 37.4146),
    # Asia
    "HND": (35.5494, 139.7798),
    "NRT": (35.7720, 140.3929),
    "PEK": (40.0799, 116.6031),
    "PVG": (31.1443, 121.8083),
    "HKG": (22.3080, 113.9185),
    "SIN": (1.3644, 103.9915),
    "ICN": (37.4602, 126.4407),
    "BKK": (13.6900, 100.7501),
    "BOM": (19.0896, 72.8656),
    "DEL": (28.5562, 77.1000),
    # Middle East
    "DXB": (25.2532, 55.3657),
    "DOH": (25.2731, 51.6081),
    "AUH": (24.4330, 54.6511),
    # Oceania
    "SYD": (-33.9399, 151.1753),
    "MEL": (-37.6690, 144.8410),
    "BNE": (-27.3842, 153.1175),
    "AKL": (-37.0082, 174.7850),
    # South America
    "GRU": (-23.4356, -46.4731),
    "EZE": (-34.8222, -58.5358),
    "SCL": (-33.3930, -70.7858),
    "BOG": (4.7016, -74.1469),
    # Africa
    "JNB": (-26.1367, 28.2411),
    "CAI": (30.1219, 31.4056),
    "CPT": (-33.9715, 18.6021),
    "NBO": (-1.3192, 36.9278),
}

REGIONS: tuple[Region, ...] = (
    Region(
        "North America",
        ("JFK", "LAX", "ORD", "ATL", "DFW", "SFO", "SEA", "MIA", "DEN", "BOS", "YYZ", "YVR", "ANC"),
        ("AAL", "DAL", "UAL", "SWA", "JBU", "ACA", "ASA"),
    ),
    Region(
        "Europe",
        ("LHR", "CDG", "AMS", "FRA", "MAD", "FCO", "MUC", "ZRH", "IST", "KEF", "SVO"),
        ("BAW", "AFR", "KLM", "DLH", "IBE", "RYR", "EZY", "SWR", "THY"),
    ),
    Region(
        "Asia",
        ("HND", "NRT", "PEK", "PVG", "HKG", "SIN", "ICN", "BKK", "BOM", "DEL"),
        ("JAL", "ANA", "CCA", "CES", "CPA", "SIA", "KAL", "THA", "AIC"),
    ),
    Region("Middle East", ("DXB", "DOH", "AUH"), ("UAE", "QTR", "ETD")),
    Region("Oceania", ("SYD", "MEL", "BNE", "AKL"), ("QFA", "VOZ", "ANZ")),
    Region("South America", ("GRU", "EZE", "SCL", "BOG"), ("TAM", "ARG", "LAN", "AVA")),
    Region("Africa", ("JNB", "CAI", "CPT", "NBO"), ("SAA", "MSR", "KQA", "ETH")),
)


class RouteCatalog:
    """Registry of airport coordinates and regional route groupings."""

    def __init__(
        self,
        airports: Mapping[str, tuple[float, float]] | None = None,
        regions: Sequence[Region] | None = None,
    ) -> None:
        self._airports = dict(AIRPORTS if airports is None else airports)
        self._regions = tuple(REGIONS if regions is None else regions)
        self._codes = tuple(self._airports)
        if len(self._codes) < 2:
            raise ValueError("a route catalog needs at least two airports")

        merged: list[str] = []
        for region in self._regions:
            for prefix in region.operators:
                if prefix not in merged:
                    merged.append(prefix)
        self._global_operators = tuple(merged) or ("SKY",)

    @property
    def codes(self) -> tuple[str, ...]:
        return self._codes

    @property
    def regions(self) -> tuple[Region, ...]:
        return self._regions

    @property
    def global_operators(self) -> tuple[str, ...]:
        return self._global_operators

    def coordinate_of(self, code: str) -> Position | None:
        coords = self._airports.get(code)
        if coords is None:
            return None
        return Position(latitude=coords[0], longitude=coords[1])

    def region_of(self, code: str) -> Region | None:
        for region in self._regions:
            if code in region.airports:
                return region
        return None

    def pick_route(self, rng: random.Random) -> RoutePick:
        """Pick a domestic pair half the time, an international pair otherwise."""

        domestic = [region for region in self._regions if len(region.airports) >= 2]
        if domestic and rng.random() < 0.5:
            region = rng.choice(domestic)
            origin = rng.choice(region.airports)
            destination = self._resample(region.airports, origin, rng)
            return RoutePick(origin, destination, region.operators or self._global_operators)

        origin = rng.choice(self._codes)
        destination = self._resample(self._codes, origin, rng)
        return RoutePick(origin, destination, self._global_operators)

    def pick_destination(self, origin: str, rng: random.Random) -> str:
        """Any catalog code other than ``origin``."""

        return self._resample(self._codes, origin, rng)

    @staticmethod
    def _resample(pool: Sequence[str], exclude: str, rng: random.Random) -> str:
        candidate = rng.choice(pool)
        while candidate == exclude:
            candidate = rng.choice(pool)
        return candidate


__all__ = ["AIRPORTS", "REGIONS", "Region", "RouteCatalog", "RoutePick"]
