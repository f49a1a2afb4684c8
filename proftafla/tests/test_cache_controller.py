import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from proftafla.cache import PageCache
from proftafla.services import CacheController


class TestCacheController:

    @pytest.mark.asyncio
    async def test_clear_cache(self, page_cache):
        await page_cache.set("felagsvisindasvid", "1")
        await page_cache.set("hugvisindasvid", "2")

        assert await CacheController(page_cache).clear_cache() is True
        assert await page_cache.get("felagsvisindasvid") is None
        assert await page_cache.get("hugvisindasvid") is None

    @pytest.mark.asyncio
    async def test_clear_empty_cache(self, page_cache):
        assert await CacheController(page_cache).clear_cache() is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused."),
        OSError("Network is unreachable"),
        RuntimeError("Event loop is closed"),
    ])
    async def test_unreachable_backend(self, mocker, error):
        client = mocker.AsyncMock()
        client.flushall.side_effect = error

        assert await CacheController(PageCache(client, ttl=60)).clear_cache() is False

    @pytest.mark.asyncio
    async def test_not_confirmed_flush(self, mocker):
        client = mocker.AsyncMock()
        client.flushall.return_value = False

        assert await CacheController(PageCache(client, ttl=60)).clear_cache() is False
