"""Anonymous link creation quota

Anonymous callers are identified by their normalized origin address and may
own at most `DefaultQuota.ANONYMOUS_LINKS` records at a time. Expired records
count towards the quota until they are reclaimed or reset.
"""

import logging

from shrinklink.constants import DefaultQuota
from shrinklink.models import QuotaUsage
from shrinklink.dao.base import AnonymousUsageBaseDAO
from shrinklink.exceptions import QuotaExceededError, ValidationError
from shrinklink.utils.runtime import normalize_address
from shrinklink.core.helpers import handle_data_store_error


logger = logging.getLogger(__name__)


class QuotaGuard:
    def __init__(self, dao: AnonymousUsageBaseDAO, limit: int = DefaultQuota.ANONYMOUS_LINKS):
        self.dao = dao
        self.limit = limit

    @handle_data_store_error
    def usage(self, address: str) -> QuotaUsage:
        return QuotaUsage(current=self.dao.count(normalize_address(address)), limit=self.limit)

    def check_and_admit(self, address: str) -> QuotaUsage:
        """Admit one more anonymous creation from `address`

        Returns:
            QuotaUsage: Usage before the admitted creation.

        Raises:
            QuotaExceededError: If the address already reached the limit.
        """
        usage = self.usage(address)
        if usage.current >= usage.limit:
            raise QuotaExceededError(current=usage.current, limit=usage.limit)
        return usage

    @handle_data_store_error
    def reset(self, *, confirm: bool = False) -> int:
        """Delete every anonymous record. Irreversible.

        Raises:
            ValidationError: Unless called with confirm=True.
        """
        if confirm is not True:
            raise ValidationError('Resetting the anonymous quota deletes all anonymous links and requires explicit confirmation.')

        deleted = self.dao.reset()
        logger.warning('Anonymous quota reset.', extra={'event': 'ANONYMOUS_QUOTA_RESET', 'deletedCount': deleted})
        return deleted
