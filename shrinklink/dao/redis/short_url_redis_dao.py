"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO for CRUD-like
operations with ShortURLModel instances.

Responsibilities:
    - Insert short URLs atomically (one Lua script behind a SET NX uniqueness constraint);
    - Retrieve short URLs by shortcode and list them per owner;
    - Atomically increment click counters (INCR) and toggle favorites;
    - Maintain owner and anonymous-address indexes;
    - Expire every key of a record once its retention window is over;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from shrinklink.models import ShortURLModel
    >>> from shrinklink.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="app:dev")

    >>> short_url = ShortURLModel(
    ...     target="https://example.com/page",
    ...     shortcode="abc123",
    ...     creator_address="203.0.113.7",
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> retrieved = dao.get("abc123")
    >>> retrieved.target
    'https://example.com/page'
    >>> retrieved.clicks
    0

    >>> dao.hit("abc123").clicks
    1
"""

from datetime import datetime, UTC

from beartype import beartype

from shrinklink.models import ShortURLModel
from shrinklink.dao.base import ShortURLBaseDAO
from shrinklink.dao.redis.mixins import RedisClientMixin
from shrinklink.dao.redis.helpers import handle_redis_connection_error, retention_deadline
from shrinklink.dao.redis.serialization import dump_record, load_record, dump_datetime
from shrinklink.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


# KEYS: link, clicks, favorite, last_clicked, id [, owner index | anonymous index, anonymous addresses]
# ARGV: payload, clicks, favorite, last_clicked, shortcode, exat ('' = no expiry), index ('user' | 'anonymous' | ''), score, address
INSERT_SCRIPT = """
local function put(key, value, nx)
    local command = {'SET', key, value}
    if nx then
        table.insert(command, 'NX')
    end
    if ARGV[6] ~= '' then
        table.insert(command, 'EXAT')
        table.insert(command, ARGV[6])
    end
    return redis.call(unpack(command))
end

if not put(KEYS[1], ARGV[1], true) then
    return 0
end
put(KEYS[2], ARGV[2])
put(KEYS[3], ARGV[3])
put(KEYS[4], ARGV[4])
put(KEYS[5], ARGV[5])

if ARGV[7] == 'user' then
    redis.call('ZADD', KEYS[6], ARGV[8], ARGV[5])
elseif ARGV[7] == 'anonymous' then
    redis.call('SADD', KEYS[6], ARGV[5])
    redis.call('SADD', KEYS[7], ARGV[9])
end
return 1
"""


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL records

    This class implements the ShortURLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Insert a short URL record, its counters and its indexes.
            Raises ShortURLAlreadyExistsError when a URL with the same shortcode exists.
            Raises DataStoreError on connectivity issues with Redis.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL record with its counters by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        hit(shortcode: str, **kwargs) -> ShortURLModel:
            Increment the click counter and stamp the last click time.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        toggle_favorite(record_id: str, owner_id: str, **kwargs) -> bool:
            Flip the favorite flag of a record owned by `owner_id`.
            Raises ShortURLNotFoundError when the record doesn't exist or isn't owned by `owner_id`.
            Raises DataStoreError on connectivity issues with Redis.

        list_by_owner(owner_id: str, **kwargs) -> list[ShortURLModel]:
            List an owner's records, newest first.
            Raises DataStoreError on connectivity issues with Redis.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._insert_script = self.redis.register_script(INSERT_SCRIPT)

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL record into Redis

        The reservation of the shortcode, the counters and the indexes are
        written by a single server-side script, so a record is either fully
        stored or not stored at all.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> short_url = ShortURLModel(target='https://example.com', shortcode='abc123', owner_id='user-1')
            >>> dao.insert(short_url)
            <ShortURLRedisDAO>
        """
        shortcode = short_url.shortcode
        exat = retention_deadline(short_url.expires_at)
        created_at = short_url.created_at or datetime.now(UTC)

        keys = [
            self.keys.link_key(shortcode),
            self.keys.link_clicks_key(shortcode),
            self.keys.link_favorite_key(shortcode),
            self.keys.link_last_clicked_key(shortcode),
            self.keys.link_id_key(short_url.id),
        ]
        index, score, address = '', '', ''
        if short_url.owner_id is not None:
            keys.append(self.keys.user_links_key(short_url.owner_id))
            index, score = 'user', created_at.timestamp()
        elif short_url.creator_address is not None:
            keys.append(self.keys.anonymous_links_key(short_url.creator_address))
            keys.append(self.keys.anonymous_addresses_key())
            index, address = 'anonymous', short_url.creator_address

        # fmt: off
        args = [
            dump_record(short_url), short_url.clicks, int(short_url.is_favorite), dump_datetime(short_url.last_clicked_at),
            shortcode, exat if exat is not None else '', index, score, address,
        ]
        # fmt: on
        if not self._insert_script(keys=keys, args=args):
            raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL record by shortcode

        The record document and its counters are fetched in a single Redis
        transaction (to avoid race conditions).

        Args:
            shortcode (str):
                The case-sensitive shortcode identifier of the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance if found.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            ShortURLModel(target='https://example.com', shortcode='abc123', ...)
        """
        with self.redis.pipeline(transaction=True) as pipe:
            self._queue_fetch(pipe, shortcode)
            payload, clicks, favorite, last_clicked = pipe.execute()

        if payload is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return load_record(shortcode, payload, clicks, favorite, last_clicked)

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Increment the click counter of a short URL.

        NOTE: the lookup and the INCR are executed as a single MULTI/EXEC block,
              so concurrent redirects of the same shortcode never lose increments.
              INCR does not know whether the record still exists; if the record
              was deleted or reclaimed in the meantime, the counter keys INCR/SET
              just recreated are discarded and the hit is reported as not found.

        Args:
            shortcode (str):
                The short code of the clicked ShortURLModel.

            **kwargs:
                clicked_at (datetime): time of the click, defaults to now (UTC).

        Return:
            ShortURLModel:
                The record with its updated click count.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given short code exists.

            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.hit('abc123').clicks
            43
        """
        clicks_key = self.keys.link_clicks_key(shortcode)
        last_clicked_key = self.keys.link_last_clicked_key(shortcode)
        clicked_at = dump_datetime(kwargs.get('clicked_at') or datetime.now(UTC))

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(self.keys.link_key(shortcode))
            pipe.incr(clicks_key)
            pipe.get(self.keys.link_favorite_key(shortcode))
            pipe.set(last_clicked_key, clicked_at, keepttl=True)
            payload, clicks, favorite, _ = pipe.execute()

        if payload is None:
            self.redis.delete(clicks_key, last_clicked_key)
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return load_record(shortcode, payload, clicks, favorite, clicked_at)

    @handle_redis_connection_error
    @beartype
    def toggle_favorite(self, record_id: str, owner_id: str, **kwargs) -> bool:
        """Flip the favorite flag of a record owned by `owner_id`

        The favorite flag is the parity of a toggle counter, so a toggle is a
        single INCR and two concurrent toggles can never both observe the same
        previous value.

        Args:
            record_id (str):
                Opaque record identifier.
            owner_id (str):
                Identifier of the acting user.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            bool:
                The new favorite flag.

        Raises:
            ShortURLNotFoundError:
                If the record does not exist or is owned by somebody else.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.toggle_favorite('3f2a...', 'user-1')
            True
        """
        not_found = ShortURLNotFoundError(f"Short URL with id '{record_id}' not found.")

        # The owner's index is part of the lookup: somebody else's record is
        # indistinguishable from a record which doesn't exist.
        shortcode = self.redis.get(self.keys.link_id_key(record_id))
        if shortcode is None or self.redis.zscore(self.keys.user_links_key(owner_id), shortcode) is None:
            raise not_found

        favorite_key = self.keys.link_favorite_key(shortcode)
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.exists(self.keys.link_key(shortcode))
            pipe.incr(favorite_key)
            exists, toggles = pipe.execute()

        if not exists:
            self.redis.delete(favorite_key)
            raise not_found

        return toggles % 2 == 1

    @handle_redis_connection_error
    @beartype
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortURLModel]:
        """List all records owned by a user, newest first

        Index entries pointing at records Redis has already reclaimed are
        pruned from the owner's index.

        Args:
            owner_id (str):
                The owner's unique identifier.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            list[ShortURLModel]:
                The owner's records.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        user_links_key = self.keys.user_links_key(owner_id)
        shortcodes = self.redis.zrevrange(user_links_key, 0, -1)
        if not shortcodes:
            return []

        with self.redis.pipeline(transaction=True) as pipe:
            for shortcode in shortcodes:
                self._queue_fetch(pipe, shortcode)
            results = pipe.execute()

        records, stale = [], []
        for i, shortcode in enumerate(shortcodes):
            payload, clicks, favorite, last_clicked = results[4 * i : 4 * i + 4]
            if payload is None:
                stale.append(shortcode)
            else:
                records.append(load_record(shortcode, payload, clicks, favorite, last_clicked))

        if stale:
            self.redis.zrem(user_links_key, *stale)
        return records

    def _queue_fetch(self, pipe, shortcode: str) -> None:
        pipe.get(self.keys.link_key(shortcode))
        pipe.get(self.keys.link_clicks_key(shortcode))
        pipe.get(self.keys.link_favorite_key(shortcode))
        pipe.get(self.keys.link_last_clicked_key(shortcode))
