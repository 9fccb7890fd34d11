"""Unit tests for the API Gateway response builders in responses.py."""

import json
from datetime import datetime, timedelta, UTC

import pytest

from shrinklink.models import ShortURLModel, LinkStatus, LinkStats
from shrinklink.exceptions import (
    ValidationError,
    NotFoundError,
    AccessDeniedError,
    GoneError,
    QuotaExceededError,
    UnauthenticatedError,
    InternalError,
    ShortCodeAllocationError,
)
from shrinklink.utils.responses import (
    CORS_HEADERS,
    json_response,
    error_response,
    response_301,
    record_to_json,
    stats_to_json,
)


CREATED_AT = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _deployed(monkeypatch):
    monkeypatch.setattr('shrinklink.utils.responses.running_locally', lambda: False)


def test_json_response():
    response = json_response(200, {'hello': 'world'}, headers={'X-Extra': '1'})

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json'
    assert response['headers']['X-Extra'] == '1'
    assert CORS_HEADERS.items() <= response['headers'].items()
    assert json.loads(response['body']) == {'hello': 'world'}


def test_response_301():
    response = response_301(location='https://example.com/page')

    assert response['statusCode'] == 301
    assert response['headers']['Location'] == 'https://example.com/page'
    assert json.loads(response['body']) == {}


@pytest.mark.parametrize(
    'error, status_code, error_code',
    [
        (ValidationError('bad input'), 400, 'validation:invalid_input'),
        (UnauthenticatedError('sign in'), 401, 'auth:unauthenticated'),
        (NotFoundError('missing'), 404, 'links:not_found'),
        (AccessDeniedError('missing'), 404, 'links:not_found'),
        (GoneError('expired'), 410, 'links:gone'),
    ],
)
def test_error_response_client_errors(error, status_code, error_code):
    response = error_response(error)
    body = json.loads(response['body'])

    assert response['statusCode'] == status_code
    assert body == {'message': str(error), 'errorCode': error_code}


def test_error_response_quota_exceeded():
    response = error_response(QuotaExceededError(current=3, limit=3))
    body = json.loads(response['body'])

    assert response['statusCode'] == 429
    assert body['errorCode'] == 'quota:anonymous_quota_exceeded'
    assert body['current'] == 3
    assert body['limit'] == 3


@pytest.mark.parametrize('error', [InternalError('redis down'), ShortCodeAllocationError('exhausted')])
def test_error_response_hides_internal_detail(error):
    body = json.loads(error_response(error)['body'])

    assert body['message'] == 'Internal Server Error'
    assert 'detail' not in body


def test_error_response_shows_internal_detail_locally(monkeypatch):
    monkeypatch.setattr('shrinklink.utils.responses.running_locally', lambda: True)

    body = json.loads(error_response(InternalError('redis down'))['body'])

    assert body['message'] == 'Internal Server Error'
    assert body['detail'] == 'redis down'


def test_record_to_json():
    record = ShortURLModel(
        id='rec-1',
        target='https://example.com/page',
        shortcode='my-link',
        owner_id='user-1',
        clicks=4,
        created_at=CREATED_AT,
        expires_at=CREATED_AT + timedelta(days=1),
        is_favorite=True,
    )

    body = record_to_json(record, status=LinkStatus.ACTIVE, short_url='https://sho.rt/my-link')

    assert body == {
        'id': 'rec-1',
        'targetUrl': 'https://example.com/page',
        'shortcode': 'my-link',
        'shortUrl': 'https://sho.rt/my-link',
        'clicks': 4,
        'isFavorite': True,
        'isActive': True,
        'status': 'active',
        'createdAt': '2025-10-15T12:00:00+00:00',
        'expiresAt': '2025-10-16T12:00:00+00:00',
        'lastClickedAt': None,
    }
    json.dumps(body)


def test_stats_to_json():
    stats = LinkStats(total_urls=2, total_clicks=5, active_urls=1, expired_urls=1, click_rate=50, avg_clicks_per_url=3, clicked_urls=1)

    assert stats_to_json(stats) == {
        'totalUrls': 2,
        'totalClicks': 5,
        'activeUrls': 1,
        'expiredUrls': 1,
        'expiringUrls': 0,
        'clickRate': 50,
        'avgClicksPerUrl': 3,
        'clickedUrls': 1,
    }
