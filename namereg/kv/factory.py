"""
Key/Value Factory

Creates the optional Redis backend from configuration.
Returns None when no Redis URL is configured; callers treat that as
"not configured" and never attempt an operation.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from redis.asyncio import Redis

from .ports import KeyValueStore
from .redis import RedisKeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class KeyValueSettings:
    """
    Configuration for the key/value backend.

    Attributes:
        redis_url: Redis connection URL; None disables the backend
    """
    redis_url: str | None = None


def settings_from_env() -> KeyValueSettings:
    """
    Create KeyValueSettings from environment variables.

    Environment variables:
        REDIS_URL: Redis connection URL (optional)
    """
    return KeyValueSettings(redis_url=os.getenv("REDIS_URL") or None)


async def create_key_value_store(settings: KeyValueSettings) -> KeyValueStore | None:
    """
    Create and connect the key/value store.

    A failed first connection is logged, not raised: the store is still
    returned and reports itself as disconnected. An unparseable URL is
    logged and treated as not configured.
    """
    if not settings.redis_url:
        logger.info("Redis not configured (no REDIS_URL)")
        return None

    try:
        client = Redis.from_url(settings.redis_url, decode_responses=True)
    except ValueError as e:
        logger.warning(f"Invalid REDIS_URL, Redis disabled: {e}")
        return None

    store = RedisKeyValueStore(client)
    await store.connect()
    return store
