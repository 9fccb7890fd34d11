import logging

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.dao.redis import ShortURLRedisDAO
from shrinklink.core import RedirectResolver
from shrinklink.exceptions import ValidationError, NotFoundError, GoneError, InternalError
from shrinklink.utils import load_config, redis_config, app_prefix, get_short_url, guarantee_500_response
from shrinklink.utils.responses import error_response, response_301
from shrinklink.utils.validators import is_valid_shortcode
from shrinklink.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    INVALID_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    REDIRECT_SUCCESS,
    INTERNAL_ERROR,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode (lookup, expiry check, click increment)
    - Step 3: Redirect client to target URL

    HTTP responses:
        301: Successful redirect
            headers:
                Location: target URL destination (scheme-normalized)
        400: Bad client request
            message: missing or malformed shortcode in path parameters
        404: Short URL doesn't exist
        410: Short URL expired or was disabled
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'my-link'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return error_response(ValidationError("Missing 'shortcode' in path."))
    if not is_valid_shortcode(shortcode):
        logger.info('Malformed "shortcode" in path. Responding with 400.', extra={'event': INVALID_SHORTCODE})
        return error_response(ValidationError("Invalid 'shortcode' in path."))
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    app_config = load_config('redirect_url')
    resolver = RedirectResolver(ShortURLRedisDAO(**redis_config(app_config), prefix=app_prefix()))

    # 2- Resolve shortcode
    try:
        resolved = resolver.resolve(shortcode)
    except NotFoundError as error:
        logger.info('Short URL record not found. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return error_response(error)
    except GoneError as error:
        logger.info('Short URL expired or disabled. Responding with 410.', extra={'shortcode': shortcode, 'event': SHORT_URL_EXPIRED})
        return error_response(error)
    except InternalError as error:
        logger.error('Failed to resolve short URL. Responding with 500.', extra={'shortcode': shortcode, 'event': INTERNAL_ERROR})
        return error_response(error)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 301.',
        extra={'shortcode': shortcode, 'clicks': resolved.clicks, 'event': REDIRECT_SUCCESS},
    )
    return response_301(location=resolved.target_url)
