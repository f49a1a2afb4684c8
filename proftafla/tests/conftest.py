import pytest

from proftafla.cache import PageCache
from proftafla.department_registry import Department, DepartmentRegistry


class FakeRedis:
    """Redis в памяти: get / set с EX / flushall и управляемые часы для проверки TTL."""

    def __init__(self):
        self.now = 0.0
        self.closed = False
        self.calls = []
        self._data = {}

    def advance(self, seconds: float):
        self.now += seconds

    async def get(self, key):
        self.calls.append(("get", key))
        value, expires_at = self._data.get(key, (None, None))
        if expires_at is not None and self.now >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key, value, ex=None):
        self.calls.append(("set", key))
        self._data[key] = (value, self.now + ex if ex else None)
        return True

    async def flushall(self):
        self.calls.append(("flushall", None))
        self._data.clear()
        return True

    async def aclose(self):
        self.closed = True

    def count(self, command: str) -> int:
        return sum(1 for name, _ in self.calls if name == command)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def page_cache(fake_redis):
    return PageCache(fake_redis, ttl=60)


@pytest.fixture
def two_departments():
    return DepartmentRegistry((
        Department(name="Félagsvísindasvið", slug="felagsvisindasvid", id=1),
        Department(name="Hugvísindasvið", slug="hugvisindasvid", id=3),
    ))
