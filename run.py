#!/usr/bin/env python3
"""
Application startup script with environment configuration support.
"""

import os
import sys
import argparse


def main():
    """Main startup function with environment configuration"""
    parser = argparse.ArgumentParser(description="Museum Navigation Backend Server")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (overrides config)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (overrides config)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (overrides config)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (overrides config)"
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async database URL; omit to run on in-memory mock data"
    )

    args = parser.parse_args()

    # Settings are read from the environment, so overrides go there first
    if args.env:
        os.environ["ENVIRONMENT"] = args.env
    if args.database_url:
        os.environ["STORAGE_DATABASE_URL"] = args.database_url

    from museum_nav.config.settings import reload_settings

    try:
        settings = reload_settings()
        print(f"✓ Loaded configuration for environment: {settings.environment.value}")
    except Exception as e:
        print(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    host = args.host or settings.host
    port = args.port or settings.port
    workers = args.workers or settings.workers
    reload = args.reload or settings.reload

    if settings.is_production() and settings.auth.jwt_secret == "dev-jwt-secret-change-me":
        print("✗ AUTH_JWT_SECRET must be set in production")
        sys.exit(1)

    print(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {host}")
    print(f"   Port: {port}")
    print(f"   Workers: {workers}")
    print(f"   Reload: {reload}")
    print(f"   Storage: {'mock data' if settings.storage.use_mock_data else 'database'}")
    print(f"   Log Level: {settings.log_level.value}")

    import uvicorn

    uvicorn.run(
        "museum_nav.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=workers if not reload else 1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
