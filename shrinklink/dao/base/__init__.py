from shrinklink.dao.base.short_url_base_dao import ShortURLBaseDAO
from shrinklink.dao.base.anonymous_usage_base_dao import AnonymousUsageBaseDAO


__all__ = [
    'ShortURLBaseDAO',
    'AnonymousUsageBaseDAO',
]
