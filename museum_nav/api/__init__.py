# API endpoints and routers

from .auth_endpoints import router as auth_router
from .route_endpoints import router as route_router
from .user_endpoints import router as user_router
from .notification_endpoints import router as notification_router
from .sync_endpoints import router as sync_router
from .health_endpoints import router as health_router

__all__ = [
    "auth_router",
    "route_router",
    "user_router",
    "notification_router",
    "sync_router",
    "health_router",
]
