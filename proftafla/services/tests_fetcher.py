import logging
from typing import List, Optional

from proftafla.cache.page_cache import PageCache
from proftafla.department_registry import DepartmentRegistry
from proftafla.schemas import FacultyGroup
from proftafla.scraper.department_source import DepartmentPageSource
from proftafla.scraper.extractor import extract_groups

logger = logging.getLogger(__name__)


class TestsFetcher:
    """
    Получение экзаменов подразделения по схеме cache-aside.

    Сначала читаем сырой ответ из кеша, при промахе запрашиваем Ugla,
    разбираем ответ и только после успешного разбора кладём его в кеш.
    """
    __test__ = False

    def __init__(self, registry: DepartmentRegistry, page_cache: PageCache, source: DepartmentPageSource):
        self.registry = registry
        self.page_cache = page_cache
        self.source = source

    async def get_tests(self, slug: str) -> Optional[List[FacultyGroup]]:
        """
        Возвращает экзамены подразделения, сгруппированные по факультетам.

        Args:
            slug (str): slug подразделения.

        Returns:
            Список FacultyGroup в порядке документа или None, если slug неизвестен.

        Raises:
            UpstreamError: Ugla недоступна или вернула некорректный ответ.
            CacheError: Redis недоступен (если не включён режим fail_open).
        """
        department = self.registry.lookup(slug)
        if department is None:
            logger.debug(f"Подразделение '{slug}' не найдено")
            return None

        cached = await self.page_cache.get(slug)
        if cached is not None:
            logger.debug(f"Ответ для '{slug}' взят из кеша")
            return extract_groups(cached)

        logger.debug(f"Промах кеша для '{slug}', запрашиваем Ugla")
        payload = await self.source.fetch(department)
        groups = extract_groups(payload)
        await self.page_cache.set(slug, payload)
        return groups
