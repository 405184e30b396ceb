"""
Revocation stores for session tokens.

A store maps the raw token string to its expiry (epoch seconds). Expired
entries are pruned lazily by the token service; there is no background sweep.

``InMemoryRevocationStore`` is process-local: revocations do not propagate
between API instances and the map grows until entries are looked up after
they expire. Use ``RedisRevocationStore`` when running more than one process.
"""
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

from museum_nav.core.cache_client import CacheClient


class RevocationStore(ABC):
    @abstractmethod
    async def add(self, token: str, expires_at: int) -> None:
        ...

    @abstractmethod
    async def get_expiry(self, token: str) -> Optional[int]:
        ...

    @abstractmethod
    async def discard(self, token: str) -> None:
        ...


class InMemoryRevocationStore(RevocationStore):
    def __init__(self):
        self._entries: Dict[str, int] = {}

    async def add(self, token: str, expires_at: int) -> None:
        self._entries[token] = expires_at

    async def get_expiry(self, token: str) -> Optional[int]:
        return self._entries.get(token)

    async def discard(self, token: str) -> None:
        self._entries.pop(token, None)

    def __len__(self) -> int:
        return len(self._entries)


class RedisRevocationStore(RevocationStore):
    """Shared store; Redis expires each entry together with its token."""

    def __init__(self, cache: CacheClient, key_prefix: str = "museum_nav:revoked:"):
        self.cache = cache
        self.key_prefix = key_prefix

    def _key(self, token: str) -> str:
        return f"{self.key_prefix}{token}"

    async def add(self, token: str, expires_at: int) -> None:
        ttl = expires_at - int(time.time())
        if ttl <= 0:
            return
        await self.cache.set(self._key(token), str(expires_at), ttl_seconds=ttl)

    async def get_expiry(self, token: str) -> Optional[int]:
        value = await self.cache.get(self._key(token))
        return int(value) if value is not None else None

    async def discard(self, token: str) -> None:
        await self.cache.delete(self._key(token))
