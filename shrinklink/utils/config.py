"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`) and deployed to the
corresponding environment.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "build": 42,
        "configs": {
            "shorten_url": {
                "redis": {"host": "...", "port": 6379, "db": 0}
            },
            "redirect_url": {
                "redis": { ... }
            },
            ...
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) from this AppConfig
document, determined by the current application environment.

Typical usage inside a Lambda handler:
    >>> from shrinklink.utils.config import load_config, redis_config
    >>> app_config = load_config('shorten_url')
    >>> redis_config(app_config)
    {'redis_host': 'redis-15501.host.docker.internal', 'redis_port': 6379, 'redis_db': 0}
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from collections.abc import Callable

import boto3

from shrinklink.types import AppConfig, LambdaConfiguration
from shrinklink.constants import ENV, PRODUCTION_ENVIRONMENTS
from shrinklink.exceptions import AppConfigError, BadConfigurationError
from shrinklink.utils.helpers import require_environment
from shrinklink.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs as <app name>:<app env>, None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def is_production() -> bool:
    return app_env() in PRODUCTION_ENVIRONMENTS


def _lambda_section(document: AppConfig, lambda_name: str) -> LambdaConfiguration:
    try:
        backend = document['active_backend']
        return {backend: document['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise AppConfigError(f"AppConfig document has no '{lambda_name}' configuration for the active backend.") from e


def _sam_load_local_appconfig(func: Callable) -> Callable:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    def __validate_appconfig_url(url: str | None) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url.rstrip('/')

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _lambda_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Raises:
        MissingEnvironmentVariableError:
            If any of the APPCONFIG_* identifiers is not set.
        AppConfigError:
            If the document is not JSON or lacks the lambda's section.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AppConfigError('AppConfig responded with a malformed configuration document.') from e

    data = _lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data


def redis_config(app_config: LambdaConfiguration) -> dict:
    """Translate a lambda's Redis section into RedisClientMixin keyword arguments.

    Example:
        >>> redis_config({'redis': {'host': 'localhost', 'port': 6379}})
        {'redis_host': 'localhost', 'redis_port': 6379}
    """
    try:
        return {f'redis_{k}': v for k, v in app_config['redis'].items()}
    except (KeyError, AttributeError) as e:
        raise AppConfigError('Redis is not configured as the active backend.') from e
