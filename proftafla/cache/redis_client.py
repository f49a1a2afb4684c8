import logging

import redis.asyncio as redis

from proftafla.config import Settings

logger = logging.getLogger(__name__)


def create_redis_client(settings: Settings) -> redis.Redis:
    """
    Создаёт асинхронный Redis-клиент с таймаутами на подключение и операции.

    Клиент не кешируется: владелец обязан закрыть его через close_redis_client.
    """
    logger.info("Создаем redis клиента")
    return redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
    )


async def close_redis_client(client: redis.Redis) -> None:
    await client.aclose()
    logger.info("Redis клиент закрыт")
