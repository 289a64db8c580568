"""
Redis Key/Value Adapter

Redis-based implementation of KeyValueStore.
Uses redis.asyncio for async operations.

Connection state:
- established: set the first time any call reaches the server
- connected: follows the outcome of the most recent call
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError, TimeoutError as RedisTimeoutError

from .ports import BackendError, BackendUnavailable, KeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore(KeyValueStore):
    """
    Redis-backed key/value store.

    Values are stored as strings; the client must be created with
    decode_responses=True.
    """

    def __init__(self, redis: Redis) -> None:
        """
        Initialize Redis key/value store.

        Args:
            redis: Redis async client
        """
        self._redis = redis
        self._established = False
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def _mark(self, ok: bool) -> None:
        if ok:
            self._established = True
        self._connected = ok

    def _fail(self, op: str, error: RedisError) -> BackendError:
        if isinstance(error, (RedisConnectionError, RedisTimeoutError)):
            self._mark(False)
        logger.error(f"Redis {op} error: {error}")
        return BackendError(str(error))

    async def connect(self) -> bool:
        """
        Establish the connection with a PING.

        Returns:
            True if the server answered
        """
        try:
            await self._redis.ping()
        except RedisError as e:
            logger.warning(f"Redis connection failed: {e}")
            self._mark(False)
            return False
        self._mark(True)
        logger.info("Redis connected")
        return True

    async def ping(self) -> str:
        if not self._established:
            raise BackendUnavailable("Redis connection was never established")
        try:
            await self._redis.ping()
        except RedisError as e:
            raise self._fail("ping", e) from e
        self._mark(True)
        return "PONG"

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        try:
            if ttl:
                await self._redis.set(key, value, ex=ttl)
            else:
                await self._redis.set(key, value)
        except RedisError as e:
            raise self._fail("set", e) from e
        self._mark(True)

    async def get(self, key: str) -> tuple[str | None, bool]:
        try:
            value = await self._redis.get(key)
        except RedisError as e:
            raise self._fail("get", e) from e
        self._mark(True)
        return value, value is not None

    async def increment(self, key: str) -> int:
        try:
            value = await self._redis.incr(key)
        except RedisError as e:
            raise self._fail("incr", e) from e
        self._mark(True)
        return int(value)

    async def close(self) -> None:
        await self._redis.aclose()
