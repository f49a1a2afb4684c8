import logging

from proftafla.department_registry import Department
from proftafla.scraper.http_client import HttpClient

logger = logging.getLogger(__name__)


class DepartmentPageSource:
    """Запрашивает у Ugla расписание экзаменов одного подразделения."""
    ACTION = "getProfSvids"

    def __init__(self, http_client: HttpClient, url: str, sid: int, proftafla_id: int):
        self.client = http_client
        self.url = url
        self.sid = sid
        self.proftafla_id = proftafla_id

    def build_params(self, department: Department) -> dict:
        return {
            "sid": self.sid,
            "a": self.ACTION,
            "proftaflaID": self.proftafla_id,
            "svidID": department.id,
            "notaVinnuToflu": 0,
        }

    async def fetch(self, department: Department) -> str:
        logger.debug(f"Загрузка расписания подразделения {department.slug} (svidID={department.id})")
        return await self.client.fetch_page_content(self.url, params=self.build_params(department))
