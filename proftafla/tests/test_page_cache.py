import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from proftafla.cache import PageCache
from proftafla.exceptions import CacheError


@pytest.fixture
def broken_redis(mocker):
    client = mocker.AsyncMock()
    client.get.side_effect = RedisConnectionError("Connection refused")
    client.set.side_effect = RedisTimeoutError("Timeout writing to socket")
    client.flushall.side_effect = RedisConnectionError("Connection refused")
    return client


class TestPageCache:

    @pytest.mark.asyncio
    async def test_round_trip_before_ttl(self, page_cache, fake_redis):
        await page_cache.set("hugvisindasvid", '{"html": ""}')
        fake_redis.advance(59)
        assert await page_cache.get("hugvisindasvid") == '{"html": ""}'

    @pytest.mark.asyncio
    async def test_expired_entry_is_miss(self, page_cache, fake_redis):
        await page_cache.set("hugvisindasvid", '{"html": ""}')
        fake_redis.advance(60)
        assert await page_cache.get("hugvisindasvid") is None

    @pytest.mark.asyncio
    async def test_set_uses_configured_ttl(self, mocker):
        client = mocker.AsyncMock()
        cache = PageCache(client, ttl=3600)
        await cache.set("menntavisindasvid", "payload")
        client.set.assert_awaited_once_with("menntavisindasvid", "payload", ex=3600)

    @pytest.mark.asyncio
    async def test_set_ttl_override(self, mocker):
        client = mocker.AsyncMock()
        cache = PageCache(client, ttl=3600)
        await cache.set("menntavisindasvid", "payload", ttl=10)
        client.set.assert_awaited_once_with("menntavisindasvid", "payload", ex=10)

    @pytest.mark.asyncio
    async def test_missing_key(self, page_cache):
        assert await page_cache.get("felagsvisindasvid") is None

    @pytest.mark.asyncio
    async def test_flush_all(self, page_cache):
        await page_cache.set("a", "1")
        await page_cache.set("b", "2")
        assert await page_cache.flush_all() is True
        assert await page_cache.get("a") is None
        assert await page_cache.get("b") is None


class TestPageCacheErrors:

    @pytest.mark.asyncio
    async def test_get_error_raises(self, broken_redis):
        with pytest.raises(CacheError):
            await PageCache(broken_redis, ttl=60).get("a")

    @pytest.mark.asyncio
    async def test_set_error_raises(self, broken_redis):
        with pytest.raises(CacheError):
            await PageCache(broken_redis, ttl=60).set("a", "1")

    @pytest.mark.asyncio
    async def test_flush_error_raises(self, broken_redis):
        with pytest.raises(CacheError):
            await PageCache(broken_redis, ttl=60).flush_all()

    @pytest.mark.asyncio
    async def test_fail_open_get_is_miss(self, broken_redis):
        assert await PageCache(broken_redis, ttl=60, fail_open=True).get("a") is None

    @pytest.mark.asyncio
    async def test_fail_open_set_is_skipped(self, broken_redis):
        await PageCache(broken_redis, ttl=60, fail_open=True).set("a", "1")
        broken_redis.set.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_os_error_is_cache_error(self, mocker):
        client = mocker.AsyncMock()
        client.get.side_effect = OSError("Network is unreachable")
        with pytest.raises(CacheError):
            await PageCache(client, ttl=60).get("a")
