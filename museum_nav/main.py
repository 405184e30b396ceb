"""
FastAPI application setup with dependency injection.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager
from typing import Optional

from museum_nav.config.settings import Settings, get_settings
from museum_nav.core.dependencies import ServiceContainer
from museum_nav.core.error_handlers import setup_error_handlers
from museum_nav.core.logging import configure_logging
from museum_nav.middleware import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: build the service container on startup and
    release its connections on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    container = ServiceContainer(settings)
    try:
        await container.initialize()
        app.state.service_container = container

        logger.info("Application startup complete")

        yield

    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    finally:
        logger.info("Shutting down application")
        await container.cleanup()
        app.state.service_container = None
        logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Explicit settings (tests); defaults to the environment

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level.value, settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.service_container = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app, expose_tracebacks=not settings.is_production())

    from museum_nav.api import (
        auth_router,
        health_router,
        notification_router,
        route_router,
        sync_router,
        user_router,
    )
    app.include_router(health_router)
    for router in (auth_router, route_router, user_router, notification_router, sync_router):
        app.include_router(router, prefix=settings.api_prefix)

    return app


# Create application instance
app = create_app()
