"""Short code allocation

Allocation and persistence are a single step: a code is reserved by inserting
the record itself, and the storage uniqueness constraint (Redis SET NX) decides
who wins when two requests pick the same code. There is no existence check
before the insert.

Classes:
    CodeAllocator:
        Reserve a random or custom short code for a new record.

Example:
    >>> from shrinklink.dao.redis import ShortURLRedisDAO
    >>> allocator = CodeAllocator(ShortURLRedisDAO(prefix='shrinklink:dev'))
    >>> record = allocator.allocate(lambda code: ShortURLModel(target='https://example.com', shortcode=code, owner_id='u-1'))
    >>> record.shortcode
    'Xk2_p9a'
    >>> allocator.allocate(build, custom='admin')
    ReservedSlugError: Custom slug 'admin' is reserved and cannot be used.
"""

import logging
from collections.abc import Callable

from shrinklink.constants import ShortCode
from shrinklink.models import ShortURLModel
from shrinklink.dao.base import ShortURLBaseDAO
from shrinklink.dao.exceptions import ShortURLAlreadyExistsError
from shrinklink.exceptions import SlugTakenError, ShortCodeAllocationError
from shrinklink.utils.shortener import generate_shortcode
from shrinklink.utils.validators import validate_custom_slug
from shrinklink.core.helpers import handle_data_store_error


logger = logging.getLogger(__name__)


class CodeAllocator:
    """Reserve unique short codes by inserting records

    Random codes start at `length` characters. After `attempts_per_length`
    collisions in a row the code is widened by one character, at most
    `max_widenings` times, after which allocation fails with
    ShortCodeAllocationError.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        *,
        generate: Callable[[int], str] = generate_shortcode,
        length: int = ShortCode.DEFAULT_LENGTH,
        attempts_per_length: int = ShortCode.ATTEMPTS_PER_LENGTH,
        max_widenings: int = ShortCode.MAX_WIDENINGS,
    ):
        self.dao = dao
        self.generate = generate
        self.length = length
        self.attempts_per_length = attempts_per_length
        self.max_widenings = max_widenings

    @handle_data_store_error
    def allocate(self, build: Callable[[str], ShortURLModel], custom: str | None = None) -> ShortURLModel:
        """Reserve a short code and persist the record built for it

        Args:
            build (Callable[[str], ShortURLModel]):
                Factory producing the full record for a candidate code.
            custom (str | None):
                Caller-supplied slug. Case is preserved.

        Returns:
            ShortURLModel: The persisted record.

        Raises:
            ValidationError: Malformed custom slug.
            ReservedSlugError: Custom slug is a reserved word.
            SlugTakenError: Custom slug is already in use.
            ShortCodeAllocationError: No free random code within the retry bound.
            InternalError: Storage failure.
        """
        if custom is not None:
            return self._allocate_custom(build, validate_custom_slug(custom))
        return self._allocate_random(build)

    def _allocate_custom(self, build: Callable[[str], ShortURLModel], slug: str) -> ShortURLModel:
        record = build(slug)
        try:
            self.dao.insert(record)
        except ShortURLAlreadyExistsError as e:
            raise SlugTakenError(slug) from e
        return record

    def _allocate_random(self, build: Callable[[str], ShortURLModel]) -> ShortURLModel:
        for widening in range(self.max_widenings + 1):
            length = self.length + widening
            for attempt in range(1, self.attempts_per_length + 1):
                record = build(self.generate(length))
                try:
                    self.dao.insert(record)
                except ShortURLAlreadyExistsError:
                    logger.debug(
                        'Short code collision, retrying.',
                        extra={'shortcode': record.shortcode, 'length': length, 'attempt': attempt},
                    )
                else:
                    return record

        attempts = (self.max_widenings + 1) * self.attempts_per_length
        logger.error(
            'Failed to allocate a free short code.',
            extra={'event': 'SHORT_CODE_ALLOCATION_EXHAUSTED', 'attempts': attempts, 'maxLength': self.length + self.max_widenings},
        )
        raise ShortCodeAllocationError(f'No free short code found after {attempts} attempts.')
