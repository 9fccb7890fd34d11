"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix(), is_production() read environment variables.

2. Configuration loading behavior
   - Ensures load_config() returns the lambda's section of the AppConfig document.
   - Ensures load_config() raises on missing environment, AppConfig failures
     and malformed documents.
   - Ensures the local AppConfig agent URL is validated.

3. redis_config() translation
"""

import os
import json
from io import BytesIO
from unittest.mock import MagicMock

import pytest
import botocore

from shrinklink.utils import config
from shrinklink.exceptions import AppConfigError, BadConfigurationError, MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Set up environment variables for testing."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')
    monkeypatch.delenv('APPCONFIG_AGENT_URL', raising=False)
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
    monkeypatch.delenv('APPCONFIG_PROFILE_NAME', raising=False)


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'configs': {
            'test_lambda': {
                'redis': {
                    'host': 'monkey',
                    'port': 659595,
                    'db': 3
                }
            }
        },
    }
    # fmt: on


@pytest.fixture
def mock_appconfig(monkeypatch, appconfig_payload):
    """Mock the AppConfig Data client returned by boto3."""
    client = MagicMock()
    client.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    client.get_latest_configuration.return_value = {'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8'))}
    monkeypatch.setattr(config.boto3, 'client', lambda service: client)
    return client


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the lowercased value of APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'Staging')
    assert config.app_env() == 'staging'


def test_app_env_defaults_to_local(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


def test_app_name(monkeypatch):
    """Ensure app_name() returns the correct environment value from APP_NAME"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'shrinklink')
    assert config.app_name() == 'shrinklink'


def test_app_name_not_set(monkeypatch):
    """Ensure app_name() returns None when APP_NAME is not set"""
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_name() is None
    assert config.app_prefix() is None


def test_app_prefix(monkeypatch):
    monkeypatch.setitem(os.environ, 'APP_NAME', 'shrinklink')
    monkeypatch.setitem(os.environ, 'APP_ENV', 'test')
    assert config.app_prefix() == 'shrinklink:test'


@pytest.mark.parametrize('env, expected', [('prod', True), ('production', True), ('PROD', True), ('dev', False), ('local', False)])
def test_is_production(monkeypatch, env, expected):
    monkeypatch.setitem(os.environ, 'APP_ENV', env)
    assert config.is_production() is expected


# -------------------------------
# 2. Configuration loading behavior
# -------------------------------


def test_load_config(mock_appconfig):
    """Ensure load_config() returns the lambda's section for the active backend."""
    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'monkey', 'port': 659595, 'db': 3}}
    mock_appconfig.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    mock_appconfig.get_latest_configuration.assert_called_once_with(ConfigurationToken='monkey_token')


def test_load_config_unknown_lambda(mock_appconfig):
    with pytest.raises(AppConfigError):
        config.load_config('other_lambda')


def test_load_config_malformed_document(mock_appconfig):
    mock_appconfig.get_latest_configuration.return_value = {'Configuration': BytesIO(b'{not json')}

    with pytest.raises(AppConfigError):
        config.load_config('test_lambda')


def test_load_config_missing_environment(monkeypatch, mock_appconfig):
    monkeypatch.delenv('APPCONFIG_PROFILE_ID')

    with pytest.raises(MissingEnvironmentVariableError, match='APPCONFIG_PROFILE_ID'):
        config.load_config('test_lambda')

    mock_appconfig.start_configuration_session.assert_not_called()


def test_missing_appconfig_raises_error(monkeypatch):
    """Ensure load_config() propagates ClientError when AppConfig returns an error."""
    client = MagicMock()
    client.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )
    monkeypatch.setattr(config.boto3, 'client', lambda service: client)

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config('test_lambda')


@pytest.mark.parametrize(
    'agent_url',
    [
        'file:///etc/passwd',
        'http://evil.example.com:2772',
        'http://localhost:8080',
    ],
)
def test_bad_local_agent_url(monkeypatch, mock_appconfig, agent_url):
    monkeypatch.setenv('APPCONFIG_AGENT_URL', agent_url)

    with pytest.raises(BadConfigurationError):
        config.load_config('test_lambda')


def test_local_agent_ignored_when_deployed(monkeypatch, mock_appconfig):
    monkeypatch.setenv('APPCONFIG_AGENT_URL', 'http://appconfig-agent:2772')

    assert config.load_config('test_lambda')['redis']['host'] == 'monkey'
    mock_appconfig.start_configuration_session.assert_called_once()


def test_local_agent_used_when_running_locally(monkeypatch, mock_appconfig, appconfig_payload):
    monkeypatch.setenv('APP_ENV', 'local')
    monkeypatch.setenv('APP_NAME', 'shrinklink')
    monkeypatch.setenv('APPCONFIG_AGENT_URL', 'http://appconfig-agent:2772/')
    urlopen = MagicMock()
    urlopen.return_value.__enter__.return_value = BytesIO(json.dumps(appconfig_payload).encode('utf-8'))
    monkeypatch.setattr(config.urllib.request, 'urlopen', urlopen)

    result = config.load_config('test_lambda')

    assert result['redis']['db'] == 3
    urlopen.assert_called_once_with(
        'http://appconfig-agent:2772/applications/shrinklink/environments/local/configurations/backend-config',
        timeout=5,
    )
    mock_appconfig.start_configuration_session.assert_not_called()


# -------------------------------
# 3. redis_config() translation
# -------------------------------


def test_redis_config():
    assert config.redis_config({'redis': {'host': 'monkey', 'port': 6379, 'db': 0}}) == {
        'redis_host': 'monkey',
        'redis_port': 6379,
        'redis_db': 0,
    }


@pytest.mark.parametrize('app_config', [{}, {'redis': None}, {'dynamodb': {'table': 'links'}}])
def test_redis_config_without_redis(app_config):
    with pytest.raises(AppConfigError):
        config.redis_config(app_config)
