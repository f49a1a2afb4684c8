class ProftaflaError(Exception):
    pass


class UpstreamError(ProftaflaError):
    """Ugla недоступна, не ответила вовремя или вернула код ответа, отличный от 200."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class PayloadError(UpstreamError):
    """Ответ Ugla не удалось декодировать (нет JSON-обёртки или поля html)."""
    pass


class ExtractionError(PayloadError):
    """Таблица экзаменов не соответствует ожидаемой структуре из пяти колонок."""
    pass


class CacheError(ProftaflaError):
    pass


class StatsError(ProftaflaError):
    """Сбор статистики прерван из-за ошибки хотя бы одного из подразделений."""

    def __init__(self, message: str, failures: dict[str, BaseException]):
        super().__init__(message)
        self.failures = failures


def should_retry(exc: BaseException) -> bool:
    """Повторяем только временные ошибки: сеть, таймауты и 5xx."""
    if isinstance(exc, PayloadError):
        return False
    if isinstance(exc, UpstreamError):
        return exc.status is None or exc.status >= 500
    return False
