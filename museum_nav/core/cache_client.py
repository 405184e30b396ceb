"""
Redis client used for state that must be shared between API instances.

Connection handling mirrors the rest of the service layer: connect lazily,
log and degrade on failure instead of failing the request.
"""

import asyncio
import logging
from typing import Optional

from redis import asyncio as aioredis
from redis.asyncio import Redis


class CacheClient:
    """
    Thin async wrapper around a Redis connection.

    All operations return a neutral value (None / False) when Redis is
    unreachable and log the failure.
    """

    def __init__(self, redis_url: str, redis_client: Optional[Redis] = None):
        """
        Initialize the cache client.

        Args:
            redis_url: Redis connection URL
            redis_client: Pre-built client (tests inject fakes here)
        """
        self.redis_url = redis_url
        self.redis_client: Optional[Redis] = redis_client
        self.logger = logging.getLogger(__name__)
        self._connection_lock = asyncio.Lock()
        self._is_connected = redis_client is not None

    async def connect(self) -> bool:
        """
        Establish connection to Redis server.

        Returns:
            True if connection successful, False otherwise
        """
        async with self._connection_lock:
            if self._is_connected and self.redis_client:
                return True

            try:
                self.logger.info(f"Connecting to Redis at {self.redis_url}")
                self.redis_client = aioredis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                    socket_timeout=5.0,
                    socket_connect_timeout=5.0,
                    retry_on_timeout=True,
                    health_check_interval=30
                )
                await self.redis_client.ping()
                self._is_connected = True
                self.logger.info("Successfully connected to Redis")
                return True

            except Exception as e:
                self.logger.error(f"Failed to connect to Redis: {str(e)}")
                self.redis_client = None
                self._is_connected = False
                return False

    async def disconnect(self) -> None:
        """Disconnect from Redis server."""
        async with self._connection_lock:
            if self.redis_client:
                try:
                    await self.redis_client.close()
                    self.logger.info("Disconnected from Redis")
                except Exception as e:
                    self.logger.warning(f"Error during Redis disconnect: {str(e)}")
                finally:
                    self.redis_client = None
                    self._is_connected = False

    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Returns:
            Cached value as string or None if not found/error
        """
        if not await self._ensure_connection():
            return None

        try:
            return await self.redis_client.get(key)
        except Exception as e:
            self.logger.warning(f"Error getting cache key '{key}': {str(e)}")
            return None

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key to set
            value: Value to cache
            ttl_seconds: Time to live in seconds (optional)

        Returns:
            True if successful, False otherwise
        """
        if not await self._ensure_connection():
            return False

        try:
            if ttl_seconds:
                result = await self.redis_client.setex(key, ttl_seconds, value)
            else:
                result = await self.redis_client.set(key, value)
            return bool(result)
        except Exception as e:
            self.logger.warning(f"Error setting cache key '{key}': {str(e)}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete a key. Returns True if a key was removed."""
        if not await self._ensure_connection():
            return False

        try:
            return bool(await self.redis_client.delete(key))
        except Exception as e:
            self.logger.warning(f"Error deleting cache key '{key}': {str(e)}")
            return False

    async def _ensure_connection(self) -> bool:
        if self._is_connected and self.redis_client:
            return True
        return await self.connect()
