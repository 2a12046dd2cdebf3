"""Liveness probe for load balancers; needs no token and no database."""

from fastapi import APIRouter

from milk_collection.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Report that the service is up, with its name, version and environment."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.app_title,
        "version": settings.app_version,
        "environment": settings.app_env,
    }
