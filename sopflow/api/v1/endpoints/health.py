"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from sopflow.core.config import get_settings
from sopflow.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    settings = get_settings()
    return HealthResponse(version=settings.app_version, backend=settings.database_backend)
