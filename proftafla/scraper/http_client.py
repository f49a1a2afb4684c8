import asyncio
import logging

from aiohttp import ClientError, ClientSession, ClientTimeout
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from proftafla.exceptions import PayloadError, UpstreamError, should_retry

logger = logging.getLogger(__name__)


class HttpClient:
    DEFAULT_HEADERS = {
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
                      "Chrome/91.0.4472.124 Safari/537.36",
        "Accept": "application/json,text/html;q=0.9,*/*;q=0.8",
        "Connection": "keep-alive"
    }
    TIMEOUT = ClientTimeout(total=60, connect=10)
    RETRY_ATTEMPTS = 3
    RETRY_WAIT = 1.0

    def __init__(
            self,
            headers: dict = None,
            timeout: ClientTimeout = None,
            retry_attempts: int = RETRY_ATTEMPTS,
            retry_wait: float = RETRY_WAIT,
    ):
        self.headers = headers or self.DEFAULT_HEADERS
        self.timeout = timeout or self.TIMEOUT
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait
        self.session = None

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Закрытие сессии при выходе из контекста."""
        await self.close()

    async def open(self):
        if self.session is None or self.session.closed:
            self.session = ClientSession(timeout=self.timeout, headers=self.headers)

    async def fetch_page_content(self, url: str, params: dict = None) -> str:
        """
        Получение контента страницы с повтором временных ошибок.

        Args:
            url (str): Адрес страницы.
            params (dict): Query-параметры запроса.

        Returns:
            str: Тело ответа.

        Raises:
            UpstreamError: Если сервер недоступен или код ответа не равен 200
                после всех попыток.
        """
        if self.session is None:
            raise RuntimeError("HTTP-сессия не открыта, используйте 'async with HttpClient()'")

        retrying = AsyncRetrying(
            retry=retry_if_exception(should_retry),
            wait=wait_exponential(multiplier=self.retry_wait, max=self.retry_wait * 5) + wait_random(0, self.retry_wait),
            stop=stop_after_attempt(self.retry_attempts),
            reraise=True,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        async for attempt in retrying:
            with attempt:
                return await self._get(url, params)

    async def _get(self, url: str, params: dict = None) -> str:
        logger.debug(f'Отправка запроса к {url} {params or ""}')
        try:
            async with self.session.get(url, params=params) as response:
                if response.status != 200:
                    raise UpstreamError(
                        f"Неверный код ответа: {response.status} при запросе к {url}",
                        status=response.status,
                    )
                try:
                    return await response.text()
                except UnicodeDecodeError as e:
                    raise PayloadError(f"Не удалось декодировать ответ {url}: {e}") from e
        except (ClientError, asyncio.TimeoutError) as e:
            raise UpstreamError(f"Ошибка запроса к {url}: {e!r}") from e

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()
