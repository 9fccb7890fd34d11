import dataclasses

import pytest

from shrinklink.models import ShortURLModel, Owned, Anonymous, QuotaUsage


def test_owned_short_url():
    short_url = ShortURLModel(target='https://example.com', shortcode='abc123', owner_id='user-1')

    assert short_url.creator == Owned('user-1')
    assert short_url.is_anonymous is False
    assert short_url.clicks == 0
    assert short_url.is_favorite is False
    assert short_url.is_active is True
    assert len(short_url.id) == 32  # uuid4 hex


def test_anonymous_short_url():
    short_url = ShortURLModel(target='https://example.com', shortcode='abc123', creator_address='203.0.113.7')

    assert short_url.creator == Anonymous('203.0.113.7')
    assert short_url.is_anonymous is True


def test_record_ids_are_unique():
    first = ShortURLModel(target='https://example.com', shortcode='abc123')
    second = ShortURLModel(target='https://example.com', shortcode='abc123')
    assert first.id != second.id


def test_short_url_cannot_be_owned_and_anonymous():
    with pytest.raises(ValueError, match='either owned or anonymous'):
        ShortURLModel(target='https://example.com', shortcode='abc123', owner_id='user-1', creator_address='203.0.113.7')


def test_clicks_cannot_be_negative():
    with pytest.raises(ValueError, match='non-negative'):
        ShortURLModel(target='https://example.com', shortcode='abc123', clicks=-1)


def test_short_url_is_immutable():
    short_url = ShortURLModel(target='https://example.com', shortcode='abc123')
    with pytest.raises(dataclasses.FrozenInstanceError):
        short_url.shortcode = 'other'


@pytest.mark.parametrize('current, limit, remaining', [(0, 3, 3), (2, 3, 1), (3, 3, 0), (5, 3, 0)])
def test_quota_usage_remaining(current, limit, remaining):
    assert QuotaUsage(current=current, limit=limit).remaining == remaining
