"""Tests for the Redis key/value adapter and its factory."""

import pytest

from namereg.kv import (
    BackendError,
    BackendUnavailable,
    KeyValueSettings,
    RedisKeyValueStore,
    create_key_value_store,
)

from tests.conftest import FakeRedis


@pytest.fixture
def store(fake_redis):
    return RedisKeyValueStore(fake_redis)


class TestRedisKeyValueStore:
    @pytest.mark.asyncio
    async def test_get_missing_key(self, store):
        assert await store.get("nope") == (None, False)

    @pytest.mark.asyncio
    async def test_set_then_get(self, store, fake_redis):
        await store.set("greeting", "hello")
        assert await store.get("greeting") == ("hello", True)
        assert "greeting" not in fake_redis.expirations

    @pytest.mark.asyncio
    async def test_set_with_ttl(self, store, fake_redis):
        await store.set("session", "abc", ttl=30)
        assert fake_redis.expirations["session"] == 30

    @pytest.mark.asyncio
    async def test_set_empty_string(self, store):
        await store.set("blank", "")
        assert await store.get("blank") == ("", True)

    @pytest.mark.asyncio
    async def test_increment_fresh_key(self, store):
        assert await store.increment("counter") == 1
        assert await store.increment("counter") == 2

    @pytest.mark.asyncio
    async def test_increment_non_integer(self, store):
        await store.set("word", "hello")
        with pytest.raises(BackendError):
            await store.increment("word")

    @pytest.mark.asyncio
    async def test_ping_before_connect_unavailable(self, store):
        with pytest.raises(BackendUnavailable):
            await store.ping()

    @pytest.mark.asyncio
    async def test_ping_after_connect(self, store):
        assert await store.connect() is True
        assert store.connected is True
        assert await store.ping() == "PONG"

    @pytest.mark.asyncio
    async def test_connection_loss_marks_disconnected(self, store, fake_redis):
        await store.connect()
        fake_redis.down = True
        with pytest.raises(BackendError):
            await store.get("key")
        assert store.connected is False

        fake_redis.down = False
        await store.get("key")
        assert store.connected is True

    @pytest.mark.asyncio
    async def test_failed_connect(self):
        store = RedisKeyValueStore(FakeRedis(down=True))
        assert await store.connect() is False
        assert store.connected is False
        with pytest.raises(BackendUnavailable):
            await store.ping()

    @pytest.mark.asyncio
    async def test_close(self, store, fake_redis):
        await store.close()
        assert fake_redis.closed is True


class TestKeyValueFactory:
    @pytest.mark.asyncio
    async def test_not_configured(self):
        assert await create_key_value_store(KeyValueSettings()) is None

    @pytest.mark.asyncio
    async def test_configured_connects(self, fake_redis, patch_redis):
        patch_redis(fake_redis)
        store = await create_key_value_store(KeyValueSettings(redis_url="redis://localhost"))
        assert store is not None
        assert store.connected is True

    @pytest.mark.asyncio
    async def test_unreachable_still_returns_store(self, patch_redis):
        patch_redis(FakeRedis(down=True))
        store = await create_key_value_store(KeyValueSettings(redis_url="redis://localhost"))
        assert store is not None
        assert store.connected is False

    @pytest.mark.asyncio
    async def test_url_without_scheme_disables_backend(self):
        store = await create_key_value_store(KeyValueSettings(redis_url="localhost:6379"))
        assert store is None
