from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
import redis

from shrinklink.models import ShortURLModel


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.exists.return_value = False
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client


@pytest.fixture
def created_at() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def owned_short_url(created_at: datetime) -> ShortURLModel:
    return ShortURLModel(
        target='https://example.com/owned',
        shortcode='abc123',
        id='rec-owned',
        owner_id='user-1',
        created_at=created_at,
        expires_at=created_at + timedelta(days=14),
    )


@pytest.fixture
def anonymous_short_url(created_at: datetime) -> ShortURLModel:
    return ShortURLModel(
        target='https://example.com/anonymous',
        shortcode='xyz789',
        id='rec-anon',
        creator_address='203.0.113.7',
        created_at=created_at,
        expires_at=created_at + timedelta(days=1),
    )
