"""
Health check endpoints.

- GET /: service banner
- GET /health: liveness plus storage mode and error statistics
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/")
async def root(request: Request):
    settings = request.app.state.settings
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "status": "running",
    }


@router.get("/health")
async def health_check(request: Request):
    settings = request.app.state.settings
    container = getattr(request.app.state, "service_container", None)
    error_handler = getattr(request.app.state, "error_handler", None)

    return {
        "status": "healthy" if container is not None else "unhealthy",
        "version": settings.app_version,
        "environment": settings.environment.value,
        "storage": container.storage_mode if container is not None else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error_statistics": error_handler.get_error_statistics() if error_handler else {},
    }
