"""Error taxonomy for feed ingestion and flight simulation.

None of these are fatal: feed failures switch the controller to simulated
data, malformed vectors are dropped one at a time, and unknown route codes
degrade a single simulated flight to dead reckoning.
"""

from __future__ import annotations


class FeedUnavailableError(RuntimeError):
    """The live feed produced nothing usable for this request."""


class TransportError(FeedUnavailableError):
    """Network failure, timeout, or non-success HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(FeedUnavailableError):
    """The feed answered successfully but with zero usable records."""


class MalformedRecordError(ValueError):
    """A single state vector is missing required finite fields."""


class UnknownRouteCodeError(KeyError):
    """A route code has no coordinate in the catalog."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code


__all__ = [
    "EmptyResultError",
    "FeedUnavailableError",
    "MalformedRecordError",
    "TransportError",
    "UnknownRouteCodeError",
]
