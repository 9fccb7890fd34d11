import logging

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.dao.redis import AnonymousUsageRedisDAO
from shrinklink.core import QuotaGuard
from shrinklink.exceptions import InternalError
from shrinklink.utils import load_config, redis_config, app_prefix, get_origin_address, guarantee_500_response
from shrinklink.utils.responses import json_response, error_response
from shrinklink.lambdas.anonymous_usage.constants import USAGE_SUCCESS, INTERNAL_ERROR


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Report the anonymous quota usage of the caller's origin address

    HTTP responses:
        200: {"current": 2, "limit": 3, "remaining": 1}
        500: internal server error
    """
    address = get_origin_address(event)

    app_config = load_config('anonymous_usage')
    guard = QuotaGuard(AnonymousUsageRedisDAO(**redis_config(app_config), prefix=app_prefix()))

    try:
        usage = guard.usage(address)
    except InternalError as error:
        logger.error('Failed to read anonymous usage. Responding with 500.', extra={'event': INTERNAL_ERROR})
        return error_response(error)

    logger.info(
        'Anonymous usage read. Responding with 200.',
        extra={'event': USAGE_SUCCESS, 'address': address, 'current': usage.current, 'limit': usage.limit},
    )
    return json_response(200, {'current': usage.current, 'limit': usage.limit, 'remaining': usage.remaining})
