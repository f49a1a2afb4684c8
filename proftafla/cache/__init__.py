from .page_cache import PageCache
from .redis_client import close_redis_client, create_redis_client
