import logging

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.dao.redis import ShortURLRedisDAO
from shrinklink.core import LinkService
from shrinklink.exceptions import UnauthenticatedError, InternalError
from shrinklink.utils import (
    load_config,
    redis_config,
    app_prefix,
    get_short_url,
    get_creator_identity,
    guarantee_500_response,
)
from shrinklink.utils.responses import json_response, error_response, record_to_json, stats_to_json
from shrinklink.lambdas.list_urls.constants import UNAUTHENTICATED, LIST_SUCCESS, INTERNAL_ERROR


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """List the caller's short URLs, newest first, with summary statistics

    HTTP responses:
        200: {"urls": [...], "stats": {...}}
        401: caller is not authenticated
        500: internal server error
    """
    identity = get_creator_identity(event)

    app_config = load_config('list_urls')
    service = LinkService(ShortURLRedisDAO(**redis_config(app_config), prefix=app_prefix()))

    try:
        listed, stats = service.list_owner_links(identity)
    except UnauthenticatedError as error:
        logger.info('Anonymous caller tried to list short URLs. Responding with 401.', extra={'event': UNAUTHENTICATED})
        return error_response(error)
    except InternalError as error:
        logger.error('Failed to list short URLs. Responding with 500.', extra={'event': INTERNAL_ERROR})
        return error_response(error)

    urls = [record_to_json(record, status=status, short_url=get_short_url(record.shortcode, event)) for record, status in listed]
    logger.info('Listed short URLs. Responding with 200.', extra={'event': LIST_SUCCESS, 'count': len(urls)})
    return json_response(200, {'urls': urls, 'stats': stats_to_json(stats)})
