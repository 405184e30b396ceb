"""
Dependency injection setup for FastAPI.
Builds repositories, the revocation store and services once per application
and exposes them to endpoints through dependency providers.
"""

from fastapi import Depends, Request, HTTPException
from typing import Optional
import logging
import asyncio

from museum_nav.config.settings import Settings
from museum_nav.core.cache_client import CacheClient
from museum_nav.core.db import build_engine, build_session_factory, create_tables
from museum_nav.core.exceptions import MuseumNavException
from museum_nav.core.jwt import TokenService
from museum_nav.core.revocation import InMemoryRevocationStore, RedisRevocationStore, RevocationStore
from museum_nav.core.security import Principal
from museum_nav.repositories import InMemoryRepository, Repository, SqlAlchemyRepository
from museum_nav.services import (
    AuthService,
    DestinationService,
    ExhibitService,
    NotificationService,
    RouteService,
    SyncService,
    UserService,
)
from museum_nav.services.mock_data import mock_destinations, mock_exhibits, mock_users


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for repositories and services with lifecycle management.

    Storage is chosen once at startup: in-memory repositories seeded with the
    demo data set when no database URL is configured, SQLAlchemy otherwise.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine = None
        self._cache: Optional[CacheClient] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

        self.users: Optional[Repository] = None
        self.exhibits: Optional[Repository] = None
        self.destinations: Optional[Repository] = None
        self.routes: Optional[Repository] = None
        self.notifications: Optional[Repository] = None
        self.revocations: Optional[RevocationStore] = None

        self.token_service: Optional[TokenService] = None
        self.auth_service: Optional[AuthService] = None
        self.user_service: Optional[UserService] = None
        self.exhibit_service: Optional[ExhibitService] = None
        self.destination_service: Optional[DestinationService] = None
        self.route_service: Optional[RouteService] = None
        self.notification_service: Optional[NotificationService] = None
        self.sync_service: Optional[SyncService] = None

    @property
    def storage_mode(self) -> str:
        return "mock" if self.settings.storage.use_mock_data else "database"

    async def initialize(self) -> None:
        """Build storage, then services in dependency order."""
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info(f"Initializing service container ({self.storage_mode} storage)")

            try:
                if self.settings.storage.use_mock_data:
                    await self._init_memory_storage()
                else:
                    await self._init_sql_storage()

                self.revocations = await self._build_revocation_store()
                self._build_services()

                self._initialized = True
                logger.info("Service container initialization completed")

            except Exception as e:
                logger.error(f"Service container initialization failed: {e}", exc_info=True)
                raise

    async def _init_memory_storage(self) -> None:
        storage = self.settings.storage
        seed = storage.seed_mock_data
        self.users = InMemoryRepository(
            mock_users(storage.mock_admin_password, self.settings.auth.bcrypt_rounds) if seed else (),
            unique_fields=("username", "email"),
        )
        self.exhibits = InMemoryRepository(mock_exhibits() if seed else ())
        self.destinations = InMemoryRepository(mock_destinations() if seed else ())
        self.routes = InMemoryRepository()
        self.notifications = InMemoryRepository()

    async def _init_sql_storage(self) -> None:
        from museum_nav.models import Destination, Exhibit, Notification, Route, User

        storage = self.settings.storage
        self._engine = build_engine(storage.database_url, echo=storage.echo_sql)
        if not self.settings.is_production():
            await create_tables(self._engine)
        session_factory = build_session_factory(self._engine)

        self.users = SqlAlchemyRepository(User, session_factory)
        self.exhibits = SqlAlchemyRepository(Exhibit, session_factory)
        self.destinations = SqlAlchemyRepository(Destination, session_factory)
        self.routes = SqlAlchemyRepository(Route, session_factory)
        self.notifications = SqlAlchemyRepository(Notification, session_factory)

        if storage.seed_mock_data:
            await self._seed_if_empty(self.exhibits, mock_exhibits())
            await self._seed_if_empty(self.destinations, mock_destinations())

    @staticmethod
    async def _seed_if_empty(repository: Repository, records) -> None:
        if await repository.list_all():
            return
        for record in records:
            await repository.create(record)
        logger.info(f"Seeded {len(records)} records into {type(repository).__name__}")

    async def _build_revocation_store(self) -> RevocationStore:
        redis_settings = self.settings.redis
        if not redis_settings.enabled:
            return InMemoryRevocationStore()

        self._cache = CacheClient(redis_settings.url)
        if not await self._cache.connect():
            logger.warning("Redis unavailable at startup; revocations will retry on use")
        return RedisRevocationStore(self._cache, key_prefix=redis_settings.key_prefix)

    def _build_services(self) -> None:
        auth = self.settings.auth
        nav = self.settings.navigation

        self.token_service = TokenService(
            secret=auth.jwt_secret,
            revocations=self.revocations,
            algorithm=auth.jwt_algorithm,
            ttl_seconds=auth.token_ttl_seconds,
        )
        self.user_service = UserService(self.users)
        self.exhibit_service = ExhibitService(self.exhibits)
        self.destination_service = DestinationService(self.destinations)
        self.auth_service = AuthService(
            self.users,
            self.token_service,
            bcrypt_rounds=auth.bcrypt_rounds,
            id_allocation_attempts=auth.id_allocation_attempts,
        )
        self.route_service = RouteService(
            self.routes,
            self.destination_service,
            self.exhibit_service,
            self.user_service,
            config=nav,
        )
        self.notification_service = NotificationService(
            self.notifications,
            self.route_service,
            deviation_threshold_m=nav.deviation_threshold_m,
        )
        self.sync_service = SyncService(self.exhibit_service, self.user_service)

    async def cleanup(self) -> None:
        """Release connections in reverse order."""
        logger.info("Cleaning up service container")

        try:
            if self._cache:
                await self._cache.disconnect()
            if self._engine is not None:
                await self._engine.dispose()
            logger.info("Service container cleanup completed")

        except Exception as e:
            logger.error(f"Service container cleanup failed: {e}", exc_info=True)
        finally:
            self._cache = None
            self._engine = None
            self._initialized = False


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the service container from application state.

    Raises:
        HTTPException: If the container was not initialized by the lifespan
    """
    container = getattr(request.app.state, 'service_container', None)
    if container is None:
        logger.error("Service container not initialized")
        raise HTTPException(
            status_code=500,
            detail="Service container not available"
        )
    return container


def extract_token(request: Request) -> Optional[str]:
    """Session token from the cookie, else from ``Authorization: Bearer``."""
    container = getattr(request.app.state, 'service_container', None)
    cookie_name = container.settings.auth.cookie_name if container else "token"
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None
    return None


async def get_current_principal(
    request: Request,
    container: ServiceContainer = Depends(get_service_container),
) -> Principal:
    """
    Authenticated principal for the request.

    Raises:
        AuthenticationError: 401 for a missing or revoked token
        TokenInvalidError: 403 for a bad signature or expired token
    """
    principal = await container.auth_service.authenticate(extract_token(request))
    request.state.principal = principal
    return principal


async def get_optional_principal(
    request: Request,
    container: ServiceContainer = Depends(get_service_container),
) -> Optional[Principal]:
    """Like get_current_principal, but anonymous requests resolve to None."""
    try:
        principal = await container.auth_service.authenticate(extract_token(request))
    except MuseumNavException:
        return None
    request.state.principal = principal
    return principal
