from typing import Optional

import structlog
from redis.asyncio import BlockingConnectionPool, Redis
from redis.exceptions import RedisError

from autocomplete.platform.config import settings
from autocomplete.storage.base import StoreAdapter

logger = structlog.get_logger()


class RedisStore(StoreAdapter):
    """
    Redis connection owner backed by a blocking connection pool.

    Concurrent commands each borrow their own connection; when the pool is
    exhausted callers wait for a free one instead of failing.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        max_connections: Optional[int] = None,
        socket_timeout: Optional[float] = None,
    ):
        self._url = redis_url or settings.REDIS_URL
        self._max_connections = max_connections or settings.REDIS_MAX_CONNECTIONS
        self._socket_timeout = socket_timeout or settings.REDIS_SOCKET_TIMEOUT
        self._pool: Optional[BlockingConnectionPool] = None
        self.client: Optional[Redis] = None

    async def connect(self) -> None:
        if not self.client:
            self._pool = BlockingConnectionPool.from_url(
                self._url,
                max_connections=self._max_connections,
                timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
            )
            self.client = Redis(connection_pool=self._pool)
            logger.info("connected_redis", max_connections=self._max_connections)

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            await self._pool.disconnect()
            self.client = None
            self._pool = None

    async def _ensure_connected(self):
        if not self.client:
            await self.connect()

    async def health_check(self) -> bool:
        await self._ensure_connected()
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.error("redis_health_check_failed", error=str(e))
            return False
