"""Durable key-value persistence used by the trash ledger.

The ledger stores one serialized JSON document per owner under a single
well-known key, so the port only needs `get` and `set`. Failures are
raised as `PersistenceError`; the ledger decides what to do with them.
"""

import abc
import logging

import redis.asyncio as redis

from erpdash.utils.redis_client import get_redis

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Reading or writing the durable store failed."""


class KeyValueStore(abc.ABC):
    @abc.abstractmethod
    async def get(self, key: str) -> str | None:
        ...

    @abc.abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...


class RedisKeyValueStore(KeyValueStore):
    """Stores ledger documents as plain Redis strings (no TTL)."""

    def __init__(self, client: redis.Redis | None = None):
        self._client = client

    async def _redis(self) -> redis.Redis:
        if self._client is None:
            self._client = await get_redis()
        return self._client

    async def get(self, key: str) -> str | None:
        try:
            client = await self._redis()
            return await client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis read failed for {key}: {e}")
            raise PersistenceError(str(e)) from e

    async def set(self, key: str, value: str) -> None:
        try:
            client = await self._redis()
            await client.set(key, value)
        except redis.RedisError as e:
            logger.error(f"Redis write failed for {key}: {e}")
            raise PersistenceError(str(e)) from e
