from shrinklink.core.expiration import parse_expiration, compute_expiry, derive_status, is_expired
from shrinklink.core.allocator import CodeAllocator
from shrinklink.core.quota import QuotaGuard
from shrinklink.core.clicks import ClickTracker
from shrinklink.core.resolver import RedirectResolver, normalize_target
from shrinklink.core.ownership import OwnershipGuard
from shrinklink.core.stats import summarize
from shrinklink.core.service import LinkService


__all__ = [
    'parse_expiration',
    'compute_expiry',
    'derive_status',
    'is_expired',
    'CodeAllocator',
    'QuotaGuard',
    'ClickTracker',
    'RedirectResolver',
    'normalize_target',
    'OwnershipGuard',
    'summarize',
    'LinkService',
]
