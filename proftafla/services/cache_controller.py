import logging

from proftafla.cache.page_cache import PageCache

logger = logging.getLogger(__name__)


class CacheController:
    def __init__(self, page_cache: PageCache):
        self.page_cache = page_cache

    async def clear_cache(self) -> bool:
        """Полностью очищает кеш. True, если очистка прошла успешно, иначе False."""
        try:
            flushed = await self.page_cache.flush_all()
        except Exception as e:
            logger.error(f"Ошибка при очистке кеша: {e}")
            return False
        logger.info("Кеш очищен" if flushed else "Redis не подтвердил очистку кеша")
        return flushed
