"""Health check endpoint."""

from fastapi import APIRouter, Request

from skystream.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(request: Request) -> dict[str, str]:
    """Report liveness and which data source is being served."""

    controller = getattr(request.app.state, "controller", None)
    source = controller.source.value if controller is not None else "none"
    return {"status": "ok", "env": settings.skystream_env, "source": source}
