from beartype import beartype

from shrinklink.dao.base import AnonymousUsageBaseDAO
from shrinklink.dao.redis.mixins import RedisClientMixin
from shrinklink.dao.redis.helpers import handle_redis_connection_error
from shrinklink.dao.redis.serialization import record_id


class AnonymousUsageRedisDAO(RedisClientMixin, AnonymousUsageBaseDAO):
    """Per-address accounting of anonymous short URLs stored in Redis

    Anonymous shortcodes are indexed per origin address in a SET, and every
    address which ever created a link is kept in a global SET so that reset()
    can find them without SCAN.
    """

    @handle_redis_connection_error
    @beartype
    def count(self, address: str, **kwargs) -> int:
        anonymous_links_key = self.keys.anonymous_links_key(address)
        shortcodes = list(self.redis.smembers(anonymous_links_key))
        if not shortcodes:
            return 0

        with self.redis.pipeline(transaction=False) as pipe:
            for shortcode in shortcodes:
                pipe.exists(self.keys.link_key(shortcode))
            exists = pipe.execute()

        # Expired records still count until Redis reclaims them
        stale = [code for code, found in zip(shortcodes, exists) if not found]
        if stale:
            self.redis.srem(anonymous_links_key, *stale)
        return len(shortcodes) - len(stale)

    @handle_redis_connection_error
    @beartype
    def reset(self, **kwargs) -> int:
        deleted = 0
        addresses_key = self.keys.anonymous_addresses_key()

        for address in self.redis.smembers(addresses_key):
            anonymous_links_key = self.keys.anonymous_links_key(address)
            shortcodes = list(self.redis.smembers(anonymous_links_key))

            if shortcodes:
                payloads = self.redis.mget([self.keys.link_key(code) for code in shortcodes])

                with self.redis.pipeline(transaction=True) as pipe:
                    pipe.delete(*(self.keys.link_key(code) for code in shortcodes))
                    for shortcode, payload in zip(shortcodes, payloads):
                        pipe.delete(
                            self.keys.link_clicks_key(shortcode),
                            self.keys.link_favorite_key(shortcode),
                            self.keys.link_last_clicked_key(shortcode),
                        )
                        if payload is not None:
                            pipe.delete(self.keys.link_id_key(record_id(payload)))
                    pipe.srem(anonymous_links_key, *shortcodes)
                    results = pipe.execute()
                deleted += results[0]

            if not self.redis.scard(anonymous_links_key):
                self.redis.srem(addresses_key, address)

        return deleted
