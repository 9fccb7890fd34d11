"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    utcnow() -> datetime
        Default clock of the application (timezone-aware UTC)
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into a generic 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from shrinklink.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "shrinkl.ink",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://shrinkl.ink'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from shrinklink.types import LambdaEvent, LambdaContext, LambdaResponse
from shrinklink.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from shrinklink.exceptions import MissingEnvironmentVariableError
from shrinklink.utils.runtime import running_locally
from shrinklink.utils.responses import json_response


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Works with both custom and default AWS API Gateway domains.
    If a custom domain is configured, the stage name is omitted.
    If using the default AWS execute-api domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://shrinkl.ink"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        return f'https://{domain}'
    elif domain:
        return f'https://{domain}/{stage}'
    else:
        # Local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: LambdaEvent) -> str:
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def utcnow() -> datetime:
    return datetime.now(UTC)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with a generic 500 when a handler raises unexpectedly

    When running locally the original exception is re-raised, so that the
    detail is visible in SAM output. Deployed environments never leak it.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return json_response(500, {'message': 'Internal Server Error', 'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR})

    return wrapper
