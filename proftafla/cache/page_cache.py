import asyncio
import logging

from redis.exceptions import RedisError

from proftafla.exceptions import CacheError

logger = logging.getLogger(__name__)

CACHE_ERRORS = (RedisError, OSError, asyncio.TimeoutError)


class PageCache:
    """
    Кеш сырых ответов Ugla в Redis: ключ - slug подразделения, значение - тело ответа.

    Свежесть записи определяется только TTL, который выставляет Redis.
    При fail_open=True ошибки чтения и записи логируются, а кеш пропускается.
    """

    def __init__(self, redis_client, ttl: int, fail_open: bool = False):
        self.redis_client = redis_client
        self.ttl = ttl
        self.fail_open = fail_open

    async def get(self, key: str) -> str | None:
        try:
            return await self.redis_client.get(key)
        except CACHE_ERRORS as e:
            if self.fail_open:
                logger.warning(f"Redis недоступен при чтении '{key}', работаем без кеша: {e!r}")
                return None
            raise CacheError(f"Не удалось прочитать '{key}' из Redis: {e!r}") from e

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        try:
            await self.redis_client.set(key, value, ex=ttl or self.ttl)
            logger.info(f"Ответ для '{key}' закеширован на {ttl or self.ttl} с")
        except CACHE_ERRORS as e:
            if self.fail_open:
                logger.warning(f"Redis недоступен при записи '{key}', запись пропущена: {e!r}")
                return
            raise CacheError(f"Не удалось записать '{key}' в Redis: {e!r}") from e

    async def flush_all(self) -> bool:
        try:
            return bool(await self.redis_client.flushall())
        except CACHE_ERRORS as e:
            raise CacheError(f"Не удалось очистить Redis: {e!r}") from e
