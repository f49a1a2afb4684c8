import asyncio
import logging
from typing import Iterable, List

from proftafla.department_registry import DepartmentRegistry
from proftafla.exceptions import ProftaflaError, StatsError
from proftafla.schemas import FacultyGroup, Stats
from proftafla.services.tests_fetcher import TestsFetcher

logger = logging.getLogger(__name__)


def compute_stats(departments_groups: Iterable[List[FacultyGroup]]) -> Stats:
    """
    Считает статистику по всем экзаменам.

    Экзамены с нечисловым полем students пропускаются и учитываются в skipped_tests.
    Если экзаменов нет, min, max и average_students остаются None.
    """
    num_tests = 0
    num_students = 0
    skipped = 0
    min_students = None
    max_students = None

    for groups in departments_groups:
        for group in groups:
            for test in group.tests:
                count = test.students_count
                if count is None:
                    skipped += 1
                    logger.warning(f"Пропущен экзамен {test.course} ({group.heading}): students={test.students!r}")
                    continue
                num_tests += 1
                num_students += count
                if min_students is None or count < min_students:
                    min_students = count
                if max_students is None or count > max_students:
                    max_students = count

    average = round(num_students / num_tests, 2) if num_tests else None
    return Stats(
        min=min_students,
        max=max_students,
        num_tests=num_tests,
        num_students=num_students,
        average_students=average,
        skipped_tests=skipped,
    )


class StatsAggregator:
    """
    Параллельно собирает экзамены всех подразделений и считает статистику.

    Политика fail-fast: первая ошибка любого подразделения отменяет остальные
    запросы, и get_stats выбрасывает StatsError.
    """
    DEPARTMENT_TIMEOUT = 120.0

    def __init__(self, registry: DepartmentRegistry, fetcher: TestsFetcher, department_timeout: float = DEPARTMENT_TIMEOUT):
        self.registry = registry
        self.fetcher = fetcher
        self.department_timeout = department_timeout

    async def _fetch_department(self, slug: str) -> List[FacultyGroup]:
        async with asyncio.timeout(self.department_timeout):
            groups = await self.fetcher.get_tests(slug)
        if groups is None:
            raise ProftaflaError(f"Подразделение '{slug}' из реестра не найдено")
        return groups

    async def get_stats(self) -> Stats:
        slugs = self.registry.slugs()
        tasks: dict[str, asyncio.Task] = {}
        try:
            async with asyncio.TaskGroup() as tg:
                for slug in slugs:
                    tasks[slug] = tg.create_task(self._fetch_department(slug), name=f"department:{slug}")
        except ExceptionGroup as eg:
            failures = {
                slug: task.exception()
                for slug, task in tasks.items()
                if task.done() and not task.cancelled() and task.exception() is not None
            }
            logger.error(f"Сбор статистики прерван, ошибки подразделений: {list(failures)}")
            raise StatsError(
                f"Не удалось получить данные подразделений: {', '.join(failures) or '?'}",
                failures=failures,
            ) from eg.exceptions[0]

        stats = compute_stats(tasks[slug].result() for slug in slugs)
        logger.info(f"Статистика собрана: {stats.num_tests} экзаменов по {len(slugs)} подразделениям")
        return stats
