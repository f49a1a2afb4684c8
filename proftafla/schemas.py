import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

STUDENTS_PATTERN = re.compile(r"\s*(\d+)")


class TestRecord(BaseModel):
    """
    Строка таблицы экзаменов.

    Attributes:
        course (str): Код курса.
        name (str): Название курса.
        type (str): Форма экзамена.
        students (str): Число студентов в том виде, в каком оно пришло из Ugla.
        date (str): Дата и время экзамена.
    """
    __test__ = False  # не тестовый класс для pytest

    model_config = ConfigDict(frozen=True)

    course: str
    name: str
    type: str
    students: str
    date: str

    @field_validator("course", "name", "type", "students", "date", mode="before")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @property
    def students_count(self) -> int | None:
        """Ведущее целое число из поля students или None, если его нет."""
        match = STUDENTS_PATTERN.match(self.students)
        if not match:
            return None
        return int(match.group(1))


class FacultyGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str
    tests: list[TestRecord] = Field(default_factory=list)


class Stats(BaseModel):
    """
    Сводная статистика по всем экзаменам всех подразделений.

    Если не найдено ни одного экзамена, min, max и average_students равны None.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    min: int | None = None
    max: int | None = None
    num_tests: int = 0
    num_students: int = 0
    average_students: float | None = None
    skipped_tests: int = 0
