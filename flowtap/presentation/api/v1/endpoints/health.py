"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from flowtap.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the application health status and the API it fronts."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "api_base_url": settings.api_base_url,
    }
