import json
from typing import cast

import pytest
from freezegun import freeze_time

from shrinklink.types import LambdaEvent, LambdaContext, LambdaConfiguration


@pytest.fixture(autouse=True)
def _deployed_env(monkeypatch):
    """Handlers behave as deployed: no local detail, no re-raised exceptions."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.setenv('APP_NAME', 'shrinklink')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


@pytest.fixture(autouse=True)
def _frozen_time():
    # Same instant as the `clock` fixture
    with freeze_time('2025-10-15 12:00:00'):
        yield


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'test_lambda'})


@pytest.fixture
def lambda_config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})


@pytest.fixture
def make_event():
    """Build an API Gateway (REST, Lambda proxy) event"""

    def factory(*, body=None, path_parameters=None, user_id=None, source_ip='203.0.113.7') -> LambdaEvent:
        request_context = {
            'domainName': 'shrinkl.ink',
            'stage': 'Prod',
            'identity': {'sourceIp': source_ip},
        }
        if user_id is not None:
            request_context['authorizer'] = {'claims': {'sub': user_id}}
        return cast(
            LambdaEvent,
            {
                'headers': {'Content-Type': 'application/json'},
                'pathParameters': path_parameters,
                'requestContext': request_context,
                'body': body if body is None or isinstance(body, str) else json.dumps(body),
            },
        )

    return factory
