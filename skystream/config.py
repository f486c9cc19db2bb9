"""Configuration settings for the SkyStream backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger("skystream.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_optional_int(env_var: str) -> int | None:
    value = os.getenv(env_var)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring non-integer value for %s: %r", env_var, value)
        return None


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    skystream_env: str = os.getenv("SKYSTREAM_ENV", "local")
    log_level: str = os.getenv("SKYSTREAM_LOG_LEVEL", "INFO")

    # Live state-vector feed
    enable_live_feed: bool = _get_bool("ENABLE_LIVE_FEED", default=True)
    opensky_base_url: str = os.getenv(
        "OPENSKY_BASE_URL",
        "https://opensky-network.org/api/states/all",
    )
    opensky_tracks_url: str = os.getenv(
        "OPENSKY_TRACKS_URL",
        "https://opensky-network.org/api/tracks/all",
    )
    opensky_timeout: float = float(os.getenv("OPENSKY_TIMEOUT", "5.0"))

    # Photo lookup
    photo_base_url: str = os.getenv(
        "PHOTO_BASE_URL", "https://api.planespotters.net/pub/photos/hex"
    )
    photo_timeout: float = float(os.getenv("PHOTO_TIMEOUT", "5.0"))

    # Viewport polling and pruning
    poll_interval_seconds: float = float(os.getenv("SKYSTREAM_POLL_INTERVAL", "10.0"))
    viewport_padding: float = float(os.getenv("SKYSTREAM_VIEWPORT_PADDING", "0.1"))

    # Fallback simulation
    sim_population: int = int(os.getenv("SKYSTREAM_SIM_POPULATION", "4000"))
    sim_cruise_kmh: float = float(os.getenv("SKYSTREAM_SIM_CRUISE_KMH", "850.0"))
    sim_seed: int | None = _get_optional_int("SKYSTREAM_SIM_SEED")


settings = Settings()

__all__ = ["settings", "Settings"]
