"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from socialcast.api.deps import WorkspaceDep
from socialcast.config import settings
from socialcast.logging import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    backend: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    backend: bool


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint that verifies the API is running.",
)
async def health_check() -> HealthResponse:
    """Basic health check - is the API up?"""
    from socialcast import __version__

    return HealthResponse(
        status="healthy",
        version=__version__,
        backend=settings.backend_provider,
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Verifies the publishing backend is reachable.",
)
async def readiness_check(workspace: WorkspaceDep) -> ReadinessResponse:
    """Readiness check including the backend."""
    backend_ok = await workspace.backend.health_check()
    if not backend_ok:
        logger.warning("backend_not_ready")
    return ReadinessResponse(ready=backend_ok, backend=backend_ok)


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Simple liveness probe for Kubernetes.",
)
async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe - is the process alive?"""
    return {"status": "alive"}
