"""
Реестр подразделений (svið) Háskóli Íslands, для которых Ugla публикует расписание экзаменов.

slug используется как внешний ключ поиска и как ключ кеша, id - как svidID в запросе к Ugla.
"""
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class Department:
    name: str
    slug: str
    id: int


DEPARTMENTS: tuple[Department, ...] = (
    Department(name="Félagsvísindasvið", slug="felagsvisindasvid", id=1),
    Department(name="Heilbrigðisvísindasvið", slug="heilbrigdisvisindasvid", id=2),
    Department(name="Hugvísindasvið", slug="hugvisindasvid", id=3),
    Department(name="Menntavísindasvið", slug="menntavisindasvid", id=4),
    Department(name="Verkfræði- og náttúruvísindasvið", slug="verkfraedi-og-natturuvisindasvid", id=5),
)


class DepartmentRegistry:
    def __init__(self, departments: Iterable[Department] = DEPARTMENTS):
        self._departments = tuple(departments)
        self._by_slug = {}
        for department in self._departments:
            if department.slug in self._by_slug:
                raise ValueError(f"Повторяющийся slug подразделения: {department.slug}")
            self._by_slug[department.slug] = department

    def slugs(self) -> list[str]:
        return [department.slug for department in self._departments]

    def list(self) -> tuple[Department, ...]:
        return self._departments

    def lookup(self, slug: str) -> Department | None:
        return self._by_slug.get(slug)

    def __len__(self):
        return len(self._departments)


registry = DepartmentRegistry()
