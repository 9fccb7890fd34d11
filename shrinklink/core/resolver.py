"""Redirect resolution

Each resolution request is independent and ends in exactly one of:
    - ResolvedLink (the caller issues a permanent redirect),
    - NotFoundError (no such short code, or it vanished mid-request),
    - GoneError (expired or soft-disabled; clicks are NOT counted).
"""

import logging

from shrinklink.types import Clock
from shrinklink.models import ResolvedLink
from shrinklink.dao.base import ShortURLBaseDAO
from shrinklink.dao.exceptions import ShortURLNotFoundError
from shrinklink.exceptions import NotFoundError, GoneError
from shrinklink.utils.helpers import utcnow
from shrinklink.utils.validators import is_valid_shortcode
from shrinklink.core.clicks import ClickTracker
from shrinklink.core.expiration import is_expired
from shrinklink.core.helpers import handle_data_store_error


logger = logging.getLogger(__name__)


def normalize_target(target: str) -> str:
    """Prefix https:// to targets without an http(s) scheme.

    Example:
        >>> normalize_target('example.com/page')
        'https://example.com/page'
        >>> normalize_target('HTTP://example.com')
        'HTTP://example.com'
    """
    if target.lower().startswith(('http://', 'https://')):
        return target
    return f'https://{target}'


class RedirectResolver:
    def __init__(self, dao: ShortURLBaseDAO, clock: Clock = utcnow, tracker: ClickTracker | None = None):
        self.dao = dao
        self.clock = clock
        self.tracker = tracker or ClickTracker(dao, clock)

    @handle_data_store_error
    def resolve(self, shortcode: str) -> ResolvedLink:
        """Resolve a short code to its target, counting the click

        Raises:
            NotFoundError: Unknown short code, or deleted while resolving.
            GoneError: Expired or soft-disabled record.
            InternalError: Storage failure.
        """
        # 1- Lookup (exact, case-sensitive). Malformed codes never reach storage.
        if not is_valid_shortcode(shortcode):
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.")
        try:
            record = self.dao.get(shortcode)
        except ShortURLNotFoundError as e:
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.") from e

        # 2- Expiry check, before anything is mutated
        if is_expired(record, self.clock()):
            raise GoneError(f"Short URL with code '{shortcode}' has expired.")
        if not record.is_active:
            raise GoneError(f"Short URL with code '{shortcode}' has been disabled.")

        # 3- Count the click. NotFoundError here means the record was deleted
        #    between the lookup and the increment.
        record = self.tracker.increment(shortcode)

        # 4- Normalize target
        return ResolvedLink(target_url=normalize_target(record.target), clicks=record.clicks)
