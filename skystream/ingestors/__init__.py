"""Data ingestors for SkyStream."""

from .enrichment import PhotoIngestor, TrackHistoryIngestor
from .opensky import OpenSkyIngestor

__all__ = [
    "OpenSkyIngestor",
    "PhotoIngestor",
    "TrackHistoryIngestor",
]
