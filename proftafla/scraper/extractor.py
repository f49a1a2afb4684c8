import logging
from typing import List

import orjson
from bs4 import BeautifulSoup, Tag

from proftafla.exceptions import ExtractionError, PayloadError
from proftafla.schemas import FacultyGroup, TestRecord

logger = logging.getLogger(__name__)

PAYLOAD_HTML_FIELD = "html"


def decode_payload(payload: str | bytes) -> str:
    """Достаёт разметку из JSON-обёртки ответа Ugla: {"html": "..."}."""
    try:
        data = orjson.loads(payload)
    except orjson.JSONDecodeError as e:
        raise PayloadError(f"Ответ не является JSON: {e}") from e

    if not isinstance(data, dict):
        raise PayloadError(f"Ожидался JSON-объект, получено: {type(data).__name__}")
    html = data.get(PAYLOAD_HTML_FIELD)
    if not isinstance(html, str):
        raise PayloadError(f"В ответе нет строкового поля '{PAYLOAD_HTML_FIELD}'")
    return html


class ExamPageExtractor:
    """
    Извлекает группы экзаменов по факультетам (deild) из разметки страницы подразделения.

    Каждый заголовок `.box h3` - отдельная FacultyGroup. Следующий за ним элемент
    содержит таблицу, каждая строка `tbody tr` которой - один экзамен.
    """
    HEADING_SELECTOR = ".box h3"
    ROW_SELECTOR = "tbody tr"
    FIELD_ORDER = ("course", "name", "type", "students", "date")

    def __init__(self, html):
        self.soup = BeautifulSoup(html, "lxml")

    def extract(self) -> List[FacultyGroup]:
        groups = []
        for heading in self.soup.select(self.HEADING_SELECTOR):
            title = heading.get_text().strip()
            tests = self._extract_tests(title, heading.find_next_sibling())
            groups.append(FacultyGroup(heading=title, tests=tests))
            logger.debug(f"Факультет: {title}, экзаменов: {len(tests)}")
        return groups

    def _extract_tests(self, heading: str, table: Tag | None) -> List[TestRecord]:
        if table is None:
            return []

        tests = []
        for index, row in enumerate(table.select(self.ROW_SELECTOR)):
            cells = row.find_all("td")
            if len(cells) < len(self.FIELD_ORDER):
                raise ExtractionError(
                    f"Строка {index} таблицы '{heading}' содержит {len(cells)} колонок, "
                    f"ожидается {len(self.FIELD_ORDER)}"
                )
            tests.append(self._extract_test_row(cells))
        return tests

    @classmethod
    def _extract_test_row(cls, cells: List[Tag]) -> TestRecord:
        return TestRecord(**{field: cell.get_text() for field, cell in zip(cls.FIELD_ORDER, cells)})


def extract_groups(payload: str | bytes) -> List[FacultyGroup]:
    return ExamPageExtractor(decode_payload(payload)).extract()
