"""Create and list orchestration over the core components

Create:
    identity -> (anonymous only) QuotaGuard.check_and_admit
             -> validate target and expiration
             -> CodeAllocator.allocate (reserve + persist)
             -> CreatedLink(short URL, status, expiration, updated quota usage)

List:
    owner -> records, newest first, each with its derived status
          -> StatsAggregator summary over the same records
"""

import logging

from shrinklink.types import Clock
from shrinklink.models import (
    ShortURLModel,
    CreatorIdentity,
    Owned,
    Anonymous,
    CreatedLink,
    LinkStats,
    LinkStatus,
    QuotaUsage,
)
from shrinklink.dao.base import ShortURLBaseDAO, AnonymousUsageBaseDAO
from shrinklink.exceptions import UnauthenticatedError
from shrinklink.utils.helpers import utcnow
from shrinklink.utils.validators import validate_target_url
from shrinklink.core.allocator import CodeAllocator
from shrinklink.core.quota import QuotaGuard
from shrinklink.core.expiration import parse_expiration, compute_expiry, derive_status
from shrinklink.core.stats import summarize
from shrinklink.core.helpers import handle_data_store_error


logger = logging.getLogger(__name__)


class LinkService:
    def __init__(
        self,
        short_url_dao: ShortURLBaseDAO,
        usage_dao: AnonymousUsageBaseDAO | None = None,
        *,
        clock: Clock = utcnow,
        production: bool = False,
        allocator: CodeAllocator | None = None,
        quota: QuotaGuard | None = None,
    ):
        self.short_url_dao = short_url_dao
        self.clock = clock
        self.production = production
        self.allocator = allocator or CodeAllocator(short_url_dao)
        self.quota = quota or (QuotaGuard(usage_dao) if usage_dao is not None else None)

    def create(
        self,
        target: str,
        identity: CreatorIdentity,
        base_url: str,
        *,
        custom_slug: str | None = None,
        expiration: str | None = None,
    ) -> CreatedLink:
        """Shorten `target` on behalf of `identity`

        Authenticated callers skip the anonymous quota.

        Raises:
            ValidationError, ReservedSlugError, SlugTakenError:
                Bad input or custom slug conflicts.
            QuotaExceededError:
                Anonymous caller already reached the limit.
            InternalError:
                Storage failure or exhausted allocation retries.
        """
        usage = None
        if isinstance(identity, Anonymous):
            if self.quota is None:
                raise TypeError('Anonymous link creation requires an anonymous usage DAO.')
            usage = self.quota.check_and_admit(identity.address)

        target = validate_target_url(target, production=self.production)
        option = parse_expiration(expiration)
        now = self.clock()

        def build(shortcode: str) -> ShortURLModel:
            return ShortURLModel(
                target=target,
                shortcode=shortcode,
                owner_id=identity.user_id if isinstance(identity, Owned) else None,
                creator_address=identity.address if isinstance(identity, Anonymous) else None,
                created_at=now,
                expires_at=compute_expiry(option, now),
            )

        record = self.allocator.allocate(build, custom=custom_slug or None)
        logger.debug('Short URL record stored.', extra={'shortcode': record.shortcode, 'recordId': record.id})

        return CreatedLink(
            record=record,
            short_url=f'{base_url.rstrip("/")}/{record.shortcode}',
            status=derive_status(record, now),
            expiration=option,
            quota=QuotaUsage(current=usage.current + 1, limit=usage.limit) if usage is not None else None,
        )

    @handle_data_store_error
    def list_owner_links(self, identity: CreatorIdentity | None) -> tuple[list[tuple[ShortURLModel, LinkStatus]], LinkStats]:
        """List an owner's records with derived status, and their summary

        Raises:
            UnauthenticatedError: If the caller is not authenticated.
        """
        if not isinstance(identity, Owned):
            raise UnauthenticatedError('Listing short URLs requires an authenticated user.')

        now = self.clock()
        records = self.short_url_dao.list_by_owner(identity.user_id)
        listed = [(record, derive_status(record, now)) for record in records]
        return listed, summarize(records, now)
