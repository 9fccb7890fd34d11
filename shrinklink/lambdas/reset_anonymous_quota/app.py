import json
import logging

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.dao.redis import AnonymousUsageRedisDAO
from shrinklink.core import QuotaGuard
from shrinklink.exceptions import ValidationError, InternalError
from shrinklink.utils import load_config, redis_config, app_prefix, guarantee_500_response
from shrinklink.utils.responses import json_response, error_response
from shrinklink.lambdas.reset_anonymous_quota.constants import (
    INVALID_JSON,
    CONFIRMATION_REQUIRED,
    RESET_SUCCESS,
    INTERNAL_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Delete every anonymous short URL (administrative)

    Destructive and irreversible. The request body must be {"confirm": true}.
    The route is expected to be protected by an administrative authorizer.

    HTTP responses:
        200: {"deletedCount": <number of deleted records>}
        400: invalid JSON or missing confirmation
        500: internal server error
    """
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return error_response(ValidationError('Invalid JSON body.'))

    confirm = isinstance(request_body, dict) and request_body.get('confirm') is True

    app_config = load_config('reset_anonymous_quota')
    guard = QuotaGuard(AnonymousUsageRedisDAO(**redis_config(app_config), prefix=app_prefix()))

    try:
        deleted = guard.reset(confirm=confirm)
    except ValidationError as error:
        logger.info('Anonymous quota reset not confirmed. Responding with 400.', extra={'event': CONFIRMATION_REQUIRED})
        return error_response(error)
    except InternalError as error:
        logger.error('Failed to reset anonymous quota. Responding with 500.', extra={'event': INTERNAL_ERROR})
        return error_response(error)

    logger.info('Anonymous quota reset. Responding with 200.', extra={'event': RESET_SUCCESS, 'deletedCount': deleted})
    return json_response(200, {'message': f'Deleted {deleted} anonymous short URLs.', 'deletedCount': deleted})
