"""Shared Redis client setup for the Redis-backed DAOs

Example:
    >>> class AnonymousUsageRedisDAO(RedisClientMixin, AnonymousUsageBaseDAO):
    ...     pass
    ...
    >>> dao = AnonymousUsageRedisDAO(prefix='shrinklink:prod')
    >>> dao.keys.anonymous_addresses_key()
    'shrinklink:prod:anonymous:addresses'
"""

import redis

from shrinklink.dao.redis.redis_key_schema import RedisKeySchema
from shrinklink.dao.redis.helpers import connection_error


class RedisClientMixin:
    """Give a DAO a health-checked Redis client (`redis`) and its key schema (`keys`).

    Either pass a ready `redis_client` or the connection parameters to build one.
    Construction fails with DataStoreError when Redis doesn't answer a PING.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        # Connection parameters may come straight from AppConfig/env as strings
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False (or raise DataStoreError) when it's unreachable"""
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            if raise_error:
                raise connection_error(self.redis, hint='Check the provided configuration parameters.') from e
            return False
        return True
