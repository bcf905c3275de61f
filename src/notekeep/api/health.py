"""Health check endpoint."""

from fastapi import APIRouter, Request

from ..core.schemas.common import HealthCheckResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthCheckResponse)
async def health_check(request: Request):
    """Report whether the storage folder is usable."""
    settings = request.app.state.settings
    storage_dir = request.app.state.user_repository.storage_dir
    storage_ok = storage_dir.is_dir()
    return HealthCheckResponse(
        status="ok" if storage_ok else "degraded",
        version=settings.app_version,
        checks={"storage": {"status": "healthy" if storage_ok else "unavailable"}},
    )
