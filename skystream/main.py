from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from fastapi import FastAPI, Request

from skystream.api import api_router
from skystream.config import settings
from skystream.ingestors import OpenSkyIngestor, PhotoIngestor, TrackHistoryIngestor
from skystream.services import FlightSimulator, ViewportFetchController, ViewportPruner

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("skystream")


def build_controller() -> ViewportFetchController:
    """Wire the live feed and fallback simulator from current settings."""

    return ViewportFetchController(
        feed=OpenSkyIngestor(),
        simulator=FlightSimulator(),
        poll_interval=settings.poll_interval_seconds,
        live_feed_enabled=settings.enable_live_feed,
    )


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    app.state.controller = build_controller()
    app.state.pruner = ViewportPruner()
    app.state.track_ingestor = TrackHistoryIngestor()
    app.state.photo_ingestor = PhotoIngestor()

    app.state.poll_task = asyncio.create_task(app.state.controller.run())
    logger.info(
        "SkyStream started (live feed %s)",
        "enabled" if settings.enable_live_feed else "disabled",
    )

    try:
        yield
    finally:
        task = getattr(app.state, "poll_task", None)
        if task:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


app = FastAPI(title="SkyStream Backend", lifespan=lifespan)


def _current_source(app: FastAPI) -> str:
    controller = getattr(app.state, "controller", None)
    return controller.source.value if controller is not None else "none"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request with the data source it was served from."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms) source=%s",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        _current_source(request.app),
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root(request: Request) -> dict[str, str]:
    return {"service": "skystream", "source": _current_source(request.app)}
