import functools
import redis
from datetime import datetime
from typing import Any
from collections.abc import Callable

from shrinklink.constants import TTL
from shrinklink.dao.exceptions import DataStoreError


__all__ = []


def connection_error(client: redis.Redis, hint: str = '') -> DataStoreError:
    """Describe an unreachable Redis server by its host, port and database"""
    info = client.connection_pool.connection_kwargs
    message = f"Can't connect to Redis at {info.get('host')}:{info.get('port')}/{info.get('db')}."
    return DataStoreError(f'{message} {hint}' if hint else message)


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.ConnectionError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def count(self, address):
        ...     return self.redis.scard(self.keys.anonymous_links_key(address))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise connection_error(self.redis) from e

    return wrapper


def retention_deadline(expires_at: datetime | None) -> int | None:
    """Return the UNIX timestamp at which Redis may reclaim a record's keys

    Records without an expiry (legacy data) are kept until deleted explicitly.
    """
    if expires_at is None:
        return None
    return int(expires_at.timestamp()) + TTL.RETENTION
