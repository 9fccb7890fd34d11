import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from shrinklink.constants import Expiration


@dataclass(frozen=True)
class Owned:
    """Link created by an authenticated user."""

    user_id: str


@dataclass(frozen=True)
class Anonymous:
    """Link created by an unauthenticated caller, identified only by origin address."""

    address: str


type CreatorIdentity = Owned | Anonymous


class LinkStatus(StrEnum):
    ACTIVE = 'active'
    EXPIRING_SOON = 'expiring_soon'
    EXPIRED = 'expired'


def _new_record_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL record.

    Exactly one of `owner_id` and `creator_address` tells who created the
    record. Owned records never take part in anonymous quota accounting.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> url = ShortURLModel(
        ...     target='https://example.com/article/123',
        ...     shortcode='my-link',
        ...     owner_id='user-123',
        ...     created_at=now,
        ...     expires_at=now + timedelta(days=1),
        ... )
        >>> url.creator
        Owned(user_id='user-123')
    """

    # fmt: off
    target: str                             # Original long URL
    shortcode: str                          # Unique, case-sensitive short identifier
    id: str = field(default_factory=_new_record_id)
    owner_id: str | None = None             # Authenticated creator
    creator_address: str | None = None      # Origin address of an anonymous creator
    clicks: int = 0                         # Successful resolutions so far
    created_at: datetime | None = None
    expires_at: datetime | None = None      # None only for legacy records (always reported as expired)
    is_favorite: bool = False
    is_active: bool = True                  # Soft-disable flag, independent of expiry
    last_clicked_at: datetime | None = None
    # fmt: on

    def __post_init__(self):
        if self.owner_id is not None and self.creator_address is not None:
            raise ValueError('A short URL is either owned or anonymous, not both.')
        if self.clicks < 0:
            raise ValueError(f'Clicks must be a non-negative integer (given value: {self.clicks}).')

    @property
    def creator(self) -> CreatorIdentity | None:
        if self.owner_id is not None:
            return Owned(self.owner_id)
        if self.creator_address is not None:
            return Anonymous(self.creator_address)
        return None

    @property
    def is_anonymous(self) -> bool:
        return self.owner_id is None and self.creator_address is not None


@dataclass(frozen=True)
class ResolvedLink:
    target_url: str     # Scheme-normalized redirect target
    clicks: int         # Click count after this resolution


@dataclass(frozen=True)
class QuotaUsage:
    current: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.current)


@dataclass(frozen=True)
class CreatedLink:
    record: ShortURLModel
    short_url: str
    status: LinkStatus
    expiration: Expiration
    quota: QuotaUsage | None = None     # Updated usage, anonymous creators only


@dataclass(frozen=True)
class LinkStats:
    total_urls: int = 0
    total_clicks: int = 0
    active_urls: int = 0
    expired_urls: int = 0
    expiring_urls: int = 0
    click_rate: int = 0             # Percentage of links clicked at least once
    avg_clicks_per_url: int = 0
    clicked_urls: int = 0
