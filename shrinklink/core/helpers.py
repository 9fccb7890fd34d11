import functools
import logging
from collections.abc import Callable

from shrinklink.dao.exceptions import DataStoreError
from shrinklink.exceptions import InternalError


__all__ = []


logger = logging.getLogger(__name__)


def handle_data_store_error[F: Callable](func: F) -> F:
    """Decorator: surface storage failures as InternalError"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DataStoreError as e:
            logger.exception('Data store failure in %s.', func.__qualname__)
            raise InternalError(str(e)) from e

    return wrapper
