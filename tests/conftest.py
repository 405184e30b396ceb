import pytest
from fastapi.testclient import TestClient

from museum_nav.config.settings import AuthSettings, RedisSettings, Settings, StorageSettings
from museum_nav.core.jwt import TokenService
from museum_nav.core.revocation import InMemoryRevocationStore
from museum_nav.main import create_app
from museum_nav.repositories import InMemoryRepository
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

TEST_SECRET = "test-secret"
DEMO_PASSWORD = "Password123!"


@pytest.fixture
def settings():
    return Settings(
        environment="testing",
        log_level="WARNING",
        auth=AuthSettings(jwt_secret=TEST_SECRET, bcrypt_rounds=4),
        storage=StorageSettings(database_url=None, seed_mock_data=True, mock_admin_password=DEMO_PASSWORD),
        redis=RedisSettings(enabled=False),
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Log in and return the token; the session cookie is dropped so tests choose how to authenticate."""
    def _login(username="john_smith", password=DEMO_PASSWORD):
        r = client.post("/v1/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        client.cookies.clear()
        return r.json()["data"]["token"]
    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def revocations():
    return InMemoryRevocationStore()


@pytest.fixture
def token_service(revocations):
    return TokenService(TEST_SECRET, revocations, ttl_seconds=3600)


@pytest.fixture
def users_repo():
    return InMemoryRepository(mock_users(DEMO_PASSWORD, bcrypt_rounds=4), unique_fields=("username", "email"))


@pytest.fixture
def exhibits_repo():
    return InMemoryRepository(mock_exhibits())


@pytest.fixture
def user_service(users_repo):
    return UserService(users_repo)


@pytest.fixture
def exhibit_service(exhibits_repo):
    return ExhibitService(exhibits_repo)


@pytest.fixture
def auth_service(users_repo, token_service):
    return AuthService(users_repo, token_service, bcrypt_rounds=4)


@pytest.fixture
def route_service(exhibit_service, user_service):
    return RouteService(
        InMemoryRepository(),
        DestinationService(InMemoryRepository(mock_destinations())),
        exhibit_service,
        user_service,
    )


@pytest.fixture
def notification_service(route_service):
    return NotificationService(InMemoryRepository(), route_service)


@pytest.fixture
def sync_service(exhibit_service, user_service):
    return SyncService(exhibit_service, user_service)
