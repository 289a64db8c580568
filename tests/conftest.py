"""Shared fixtures for namereg tests."""

from types import SimpleNamespace

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from namereg.config import ServiceSettings
from namereg.kv import KeyValueSettings


class FakeRedis:
    """In-process stand-in for redis.asyncio.Redis (decode_responses=True)."""

    def __init__(self, down: bool = False):
        self.data: dict[str, str] = {}
        self.expirations: dict[str, int] = {}
        self.down = down
        self.closed = False

    def _check(self):
        if self.down:
            raise RedisConnectionError("Connection refused")

    async def ping(self):
        self._check()
        return True

    async def set(self, key, value, ex=None):
        self._check()
        self.data[key] = str(value)
        if ex is not None:
            self.expirations[key] = ex
        else:
            self.expirations.pop(key, None)
        return True

    async def get(self, key):
        self._check()
        return self.data.get(key)

    async def incr(self, key):
        self._check()
        try:
            value = int(self.data.get(key, "0")) + 1
        except ValueError:
            raise ResponseError("value is not an integer or out of range")
        self.data[key] = str(value)
        return value

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def patch_redis(monkeypatch):
    """Make the key/value factory hand out the given fake client."""

    def _patch(client: FakeRedis) -> None:
        monkeypatch.setattr(
            "namereg.kv.factory.Redis",
            SimpleNamespace(from_url=lambda url, **kwargs: client),
        )

    return _patch


@pytest.fixture
def memory_settings():
    return ServiceSettings(service_id="test-service")


@pytest.fixture
def redis_settings():
    return ServiceSettings(
        service_id="test-service",
        kv=KeyValueSettings(redis_url="redis://localhost:6379/0"),
    )
