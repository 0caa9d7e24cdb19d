"""Async Redis client and the Redlock instance used for per-product order locks."""

from typing import Optional

from redis.asyncio import Redis as AsyncRedis
from redlock import Redlock

from backoffice.core.config import settings

async_redis = AsyncRedis.from_url(settings.redis_url, decode_responses=True)


def create_redlock() -> Optional[Redlock]:
    """Build a Redlock from REDIS_HOSTS (comma separated) or the single REDIS_HOST."""
    if not settings.REDLOCK_ENABLED:
        return None

    redis_hosts = settings.REDIS_HOSTS or settings.REDIS_HOST

    if "," in redis_hosts:  # multi-instance
        servers = [
            {"host": host.strip(), "port": settings.REDIS_PORT, "db": settings.REDIS_DB}
            for host in redis_hosts.split(",")
            if host.strip()
        ]
    else:
        servers = [
            {"host": redis_hosts.strip(), "port": settings.REDIS_PORT, "db": settings.REDIS_DB}
        ]

    return Redlock(servers)


redlock = create_redlock()

__all__ = [
    "async_redis",
    "redlock",
    "create_redlock",
]
