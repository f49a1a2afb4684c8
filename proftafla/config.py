from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("proftafla_redis_url", "redis_url"),
    )
    cache_ttl: int = Field(
        default=3600,
        gt=0,
        validation_alias=AliasChoices("proftafla_cache_ttl", "redis_expire"),
    )
    redis_socket_timeout: float = 5.0
    # Если Redis недоступен: False - ошибка запроса, True - работаем в обход кеша
    cache_fail_open: bool = False

    upstream_url: str = "https://ugla.hi.is/Proftafla/View/ajax.php"
    upstream_sid: int = 2027
    proftafla_id: int = 37

    request_timeout: float = 60.0
    connect_timeout: float = 10.0
    retry_attempts: int = Field(default=3, ge=1)
    retry_wait: float = Field(default=1.0, ge=0)
    department_timeout: float = 120.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="PROFTAFLA_",
        env_file=BASE_DIR.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",  # Игнорировать лишние поля в .env
    )


settings = Settings()
