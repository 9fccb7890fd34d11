from shrinklink.dao.redis.redis_key_schema import RedisKeySchema
from shrinklink.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from shrinklink.dao.redis.anonymous_usage_redis_dao import AnonymousUsageRedisDAO
from shrinklink.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortURLRedisDAO',
    'AnonymousUsageRedisDAO',
    'RedisClientMixin',
]
