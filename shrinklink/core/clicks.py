from shrinklink.types import Clock
from shrinklink.models import ShortURLModel
from shrinklink.dao.base import ShortURLBaseDAO
from shrinklink.dao.exceptions import ShortURLNotFoundError
from shrinklink.exceptions import NotFoundError
from shrinklink.utils.helpers import utcnow
from shrinklink.core.helpers import handle_data_store_error


class ClickTracker:
    """Count successful resolutions with the data store's atomic increment.

    Expiry is not checked here. The resolver decides once, before calling
    increment(), whether the record may still be resolved.
    """

    def __init__(self, dao: ShortURLBaseDAO, clock: Clock = utcnow):
        self.dao = dao
        self.clock = clock

    @handle_data_store_error
    def increment(self, shortcode: str) -> ShortURLModel:
        try:
            return self.dao.hit(shortcode, clicked_at=self.clock())
        except ShortURLNotFoundError as e:
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.") from e
