import logging

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.dao.redis import ShortURLRedisDAO
from shrinklink.core import OwnershipGuard
from shrinklink.exceptions import ValidationError, UnauthenticatedError, NotFoundError, InternalError
from shrinklink.utils import load_config, redis_config, app_prefix, get_user_id, guarantee_500_response
from shrinklink.utils.responses import json_response, error_response
from shrinklink.lambdas.toggle_favorite.constants import (
    UNAUTHENTICATED,
    MISSING_RECORD_ID,
    SHORT_URL_NOT_FOUND,
    FAVORITE_TOGGLED,
    INTERNAL_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Flip the favorite flag of one of the caller's short URLs (PATCH /urls/{id}/favorite)

    HTTP responses:
        200: {"id": ..., "isFavorite": <new value>}
        400: missing record id in path
        401: caller is not authenticated
        404: no such record, or it belongs to somebody else
        500: internal server error
    """
    user_id = get_user_id(event)
    if user_id is None:
        logger.info('Anonymous caller tried to toggle a favorite. Responding with 401.', extra={'event': UNAUTHENTICATED})
        return error_response(UnauthenticatedError('Toggling favorites requires an authenticated user.'))

    record_id = (event.get('pathParameters') or {}).get('id')
    if not record_id:
        logger.info('Missing "id" in path. Responding with 400.', extra={'event': MISSING_RECORD_ID})
        return error_response(ValidationError("Missing 'id' in path."))

    app_config = load_config('toggle_favorite')
    guard = OwnershipGuard(ShortURLRedisDAO(**redis_config(app_config), prefix=app_prefix()))

    try:
        is_favorite = guard.toggle_favorite(record_id, user_id)
    except NotFoundError as error:
        logger.info('Short URL not found for caller. Responding with 404.', extra={'recordId': record_id, 'event': SHORT_URL_NOT_FOUND})
        return error_response(error)
    except InternalError as error:
        logger.error('Failed to toggle favorite. Responding with 500.', extra={'recordId': record_id, 'event': INTERNAL_ERROR})
        return error_response(error)

    logger.info('Favorite toggled. Responding with 200.', extra={'recordId': record_id, 'isFavorite': is_favorite, 'event': FAVORITE_TOGGLED})
    return json_response(200, {'id': record_id, 'isFavorite': is_favorite})
