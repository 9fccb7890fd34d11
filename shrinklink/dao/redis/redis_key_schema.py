import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing data models.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "shrinklink:prod" or "shrinklink:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, shortcode: str) -> str:
        return f'links:{shortcode}'

    @prefix_key
    def link_clicks_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:clicks'

    @prefix_key
    def link_favorite_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:favorite'

    @prefix_key
    def link_last_clicked_key(self, shortcode: str) -> str:
        return f'links:{shortcode}:last_clicked'

    @prefix_key
    def link_id_key(self, record_id: str) -> str:
        return f'links:ids:{record_id}'

    @prefix_key
    def user_links_key(self, user_id: str) -> str:
        return f'users:{user_id}:links'

    @prefix_key
    def anonymous_links_key(self, address: str) -> str:
        return f'anonymous:{address}:links'

    @prefix_key
    def anonymous_addresses_key(self) -> str:
        return 'anonymous:addresses'
