from shrinklink.dao.base import ShortURLBaseDAO
from shrinklink.dao.exceptions import ShortURLNotFoundError
from shrinklink.exceptions import AccessDeniedError
from shrinklink.core.helpers import handle_data_store_error


class OwnershipGuard:
    """Owner-scoped mutations of short URL records.

    The data store looks records up by id AND owner in one step, so a
    record owned by somebody else cannot be told apart from a missing one.
    """

    def __init__(self, dao: ShortURLBaseDAO):
        self.dao = dao

    @handle_data_store_error
    def toggle_favorite(self, record_id: str, acting_user_id: str) -> bool:
        """Flip the favorite flag and return its new value.

        Not idempotent: two consecutive calls restore the original value.

        Raises:
            AccessDeniedError: Missing record or not owned by `acting_user_id`.
        """
        try:
            return self.dao.toggle_favorite(record_id, acting_user_id)
        except ShortURLNotFoundError as e:
            raise AccessDeniedError(f"Short URL with id '{record_id}' not found.") from e
