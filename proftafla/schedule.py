import logging
from typing import List, Optional

from aiohttp import ClientTimeout

from proftafla.cache import PageCache, close_redis_client, create_redis_client
from proftafla.config import Settings, settings as default_settings
from proftafla.department_registry import Department, DepartmentRegistry, registry as default_registry
from proftafla.schemas import FacultyGroup, Stats
from proftafla.scraper import DepartmentPageSource, HttpClient
from proftafla.services import CacheController, StatsAggregator, TestsFetcher

logger = logging.getLogger(__name__)


class ExamSchedule:
    """
    Точка входа: владеет HTTP-сессией и Redis-клиентом и связывает сервисы.

    Использование:
        async with ExamSchedule() as schedule:
            stats = await schedule.get_stats()

    Переданные снаружи http_client и redis_client не закрываются при выходе.
    """

    def __init__(
            self,
            settings: Settings = None,
            http_client: HttpClient = None,
            redis_client=None,
            registry: DepartmentRegistry = None,
    ):
        self.settings = settings or default_settings
        self.registry = registry or default_registry
        self._owns_http_client = http_client is None
        self._owns_redis_client = redis_client is None
        self.http_client = http_client or HttpClient(
            timeout=ClientTimeout(total=self.settings.request_timeout, connect=self.settings.connect_timeout),
            retry_attempts=self.settings.retry_attempts,
            retry_wait=self.settings.retry_wait,
        )
        self.redis_client = redis_client

        self.fetcher = None
        self.cache_controller = None
        self.aggregator = None

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def open(self):
        try:
            if self._owns_http_client:
                await self.http_client.open()
            if self.redis_client is None:
                self.redis_client = create_redis_client(self.settings)
        except BaseException:
            await self.close()
            raise

        page_cache = PageCache(self.redis_client, ttl=self.settings.cache_ttl, fail_open=self.settings.cache_fail_open)
        source = DepartmentPageSource(
            self.http_client,
            url=self.settings.upstream_url,
            sid=self.settings.upstream_sid,
            proftafla_id=self.settings.proftafla_id,
        )
        self.fetcher = TestsFetcher(self.registry, page_cache, source)
        self.cache_controller = CacheController(page_cache)
        self.aggregator = StatsAggregator(self.registry, self.fetcher, self.settings.department_timeout)
        logger.debug("ExamSchedule готов к работе")

    async def close(self):
        if self._owns_http_client:
            await self.http_client.close()
        if self._owns_redis_client and self.redis_client is not None:
            await close_redis_client(self.redis_client)
            self.redis_client = None

    def departments(self) -> tuple[Department, ...]:
        return self.registry.list()

    async def get_tests(self, slug: str) -> Optional[List[FacultyGroup]]:
        return await self._require(self.fetcher).get_tests(slug)

    async def clear_cache(self) -> bool:
        return await self._require(self.cache_controller).clear_cache()

    async def get_stats(self) -> Stats:
        return await self._require(self.aggregator).get_stats()

    @staticmethod
    def _require(service):
        if service is None:
            raise RuntimeError("ExamSchedule не открыт, используйте 'async with ExamSchedule()'")
        return service
