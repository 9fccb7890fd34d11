import json
import logging

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.models import CreatedLink
from shrinklink.dao.redis import ShortURLRedisDAO, AnonymousUsageRedisDAO
from shrinklink.core import LinkService
from shrinklink.exceptions import ValidationError, QuotaExceededError, InternalError
from shrinklink.utils import (
    load_config,
    redis_config,
    app_prefix,
    is_production,
    base_url,
    get_creator_identity,
    guarantee_500_response,
)
from shrinklink.utils.responses import json_response, error_response, record_to_json
from shrinklink.lambdas.shorten_url.constants import (
    INVALID_JSON,
    INVALID_REQUEST,
    ANONYMOUS_QUOTA_EXCEEDED,
    SHORTEN_SUCCESS,
    INTERNAL_ERROR,
)


logger = logging.getLogger(__name__)


def response_201(created: CreatedLink) -> LambdaResponse:
    body = {
        'message': f'Successfully shortened {created.record.target} to {created.short_url}',
        **record_to_json(created.record, status=created.status, short_url=created.short_url),
        'expirationOption': created.expiration.value,
    }
    if created.quota is not None:
        body['quota'] = {
            'current': created.quota.current,
            'limit': created.quota.limit,
            'remaining': created.quota.remaining,
        }
    return json_response(201, body)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Parse the JSON request body
    - Step 2: Identify the caller (Cognito user or anonymous origin address)
    - Step 3: Create the short URL (quota check for anonymous callers,
              validation, code allocation, persistence)
    - Step 4: Respond to user with 201 created

    Request body:
        targetUrl (str): required
        customSlug (str): optional, 3-50 characters of [A-Za-z0-9_-]
        expirationOption (str): optional, one of 5h, 1d, 7d, 14d (default)

    HTTP responses:
        201: Successful URL shortening
            shortUrl, shortcode, status, expirationOption, expiresAt, ...
            quota: {current, limit, remaining} (anonymous callers only)
        400: Bad client request (invalid JSON, invalid URL, reserved or taken slug)
        429: Anonymous quota reached
            current, limit
        500: Internal server error

    Example:
        >>> event = {'body': '{"targetUrl": "https://example.com", "customSlug": "my-link"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['shortUrl']
        'http://localhost:3000/my-link'
    """
    # 1- Parse request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return error_response(ValidationError('Invalid JSON body.'))
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON})
        return error_response(ValidationError('JSON body must be an object.'))

    # 2- Identify the caller
    identity = get_creator_identity(event)

    app_config = load_config('shorten_url')
    config = redis_config(app_config)
    service = LinkService(
        ShortURLRedisDAO(**config, prefix=app_prefix()),
        AnonymousUsageRedisDAO(**config, prefix=app_prefix()),
        production=is_production(),
    )

    # 3- Create the short URL
    try:
        created = service.create(
            request_body.get('targetUrl'),
            identity,
            base_url(event),
            custom_slug=request_body.get('customSlug'),
            expiration=request_body.get('expirationOption'),
        )
    except QuotaExceededError as error:
        logger.info(
            'Anonymous quota exceeded. Responding with 429.',
            extra={'event': ANONYMOUS_QUOTA_EXCEEDED, 'current': error.current, 'limit': error.limit},
        )
        return error_response(error)
    except ValidationError as error:
        logger.info('Invalid shorten request. Responding with 400.', extra={'event': INVALID_REQUEST, 'errorCode': error.error_code})
        return error_response(error)
    except InternalError as error:
        logger.error('Failed to create short URL. Responding with 500.', extra={'event': INTERNAL_ERROR, 'errorCode': error.error_code})
        return error_response(error)

    # 4- Respond with the new short URL
    logger.info(
        'Short URL created. Responding with 201.',
        extra={'event': SHORTEN_SUCCESS, 'shortcode': created.record.shortcode, 'anonymous': created.record.is_anonymous},
    )
    return response_201(created)
