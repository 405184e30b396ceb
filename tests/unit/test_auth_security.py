import time

import jwt
import pytest

from museum_nav.core.cache_client import CacheClient
from museum_nav.core.exceptions import TokenInvalidError
from museum_nav.core.revocation import RedisRevocationStore
from museum_nav.core.security import Principal, hash_password, verify_password


def test_password_hash_and_verify():
    raw = "SuperSecurePass123!"
    hashed = hash_password(raw, rounds=4)
    assert hashed != raw
    assert hashed.startswith("$2")
    assert verify_password(raw, hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password(raw, "not-a-bcrypt-hash")


def test_issue_and_decode_token(token_service):
    token = token_service.issue(Principal(user_id=7, username="ada", role="admin"))
    claims = token_service.decode(token)

    assert claims["sub"] == "7"
    assert claims["username"] == "ada"
    assert claims["role"] == "admin"
    assert claims["exp"] - claims["iat"] == 3600
    assert claims["jti"]

    principal = Principal.from_claims(claims)
    assert principal == Principal(7, "ada", "admin")
    assert principal.is_admin


def test_decode_rejects_foreign_signature(token_service):
    forged = jwt.encode({"sub": "1", "exp": int(time.time()) + 60}, "other-secret", algorithm="HS256")
    with pytest.raises(TokenInvalidError) as exc:
        token_service.decode(forged)
    assert exc.value.status_code == 403
    assert exc.value.message == "Token is not valid"


def test_decode_rejects_expired_token(token_service):
    token = token_service.issue(Principal(1, "john_smith"), ttl_seconds=-10)
    with pytest.raises(TokenInvalidError):
        token_service.decode(token)


@pytest.mark.asyncio
async def test_revoke_then_is_revoked(token_service, revocations):
    token = token_service.issue(Principal(1, "john_smith"))
    assert await token_service.is_revoked(token) is False

    await token_service.revoke(token)

    assert await token_service.is_revoked(token) is True
    assert len(revocations) == 1


@pytest.mark.asyncio
async def test_concurrent_sessions_are_revoked_independently(token_service):
    principal = Principal(1, "john_smith")
    first = token_service.issue(principal)
    second = token_service.issue(principal)
    assert first != second

    await token_service.revoke(first)

    assert await token_service.is_revoked(first) is True
    assert await token_service.is_revoked(second) is False
    assert token_service.decode(second)["sub"] == "1"


@pytest.mark.asyncio
async def test_revoke_ignores_malformed_tokens(token_service, revocations):
    await token_service.revoke("not.a.jwt")
    await token_service.revoke(None)
    await token_service.revoke(jwt.encode({"sub": "1"}, "test-secret", algorithm="HS256"))

    assert len(revocations) == 0


@pytest.mark.asyncio
async def test_expired_revocations_are_evicted_on_lookup(token_service, revocations):
    token = token_service.issue(Principal(1, "john_smith"), ttl_seconds=-10)
    await token_service.revoke(token)
    assert len(revocations) == 1

    assert await token_service.is_revoked(token) is False
    assert len(revocations) == 0


class FakeRedis:
    def __init__(self):
        self.values = {}
        self.ttls = {}

    async def ping(self):
        return True

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value):
        self.values[key] = value
        return True

    async def setex(self, key, ttl, value):
        self.values[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key):
        return 1 if self.values.pop(key, None) is not None else 0

    async def close(self):
        pass


@pytest.mark.asyncio
async def test_redis_revocation_store_expires_with_token():
    fake = FakeRedis()
    store = RedisRevocationStore(CacheClient("redis://unused", redis_client=fake), key_prefix="t:")
    expires_at = int(time.time()) + 120

    await store.add("abc", expires_at)

    assert fake.values == {"t:abc": str(expires_at)}
    assert 0 < fake.ttls["t:abc"] <= 120
    assert await store.get_expiry("abc") == expires_at

    await store.discard("abc")
    assert await store.get_expiry("abc") is None


@pytest.mark.asyncio
async def test_redis_revocation_store_skips_already_expired_tokens():
    fake = FakeRedis()
    store = RedisRevocationStore(CacheClient("redis://unused", redis_client=fake))

    await store.add("abc", int(time.time()) - 5)

    assert fake.values == {}
