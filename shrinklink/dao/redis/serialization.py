"""(De)serialization of ShortURLModel records stored in Redis

A record is split across several keys (see RedisKeySchema):
    - links:<shortcode>               JSON document with the immutable fields
    - links:<shortcode>:clicks        integer click counter
    - links:<shortcode>:favorite      favorite toggle counter (flag = counter parity)
    - links:<shortcode>:last_clicked  ISO-8601 timestamp, empty string if never clicked
"""

import json
from datetime import datetime

from shrinklink.models import ShortURLModel


__all__ = ['dump_record', 'load_record', 'dump_datetime', 'load_datetime', 'record_id']


def dump_datetime(value: datetime | None) -> str:
    return value.isoformat() if value is not None else ''


def load_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def dump_record(short_url: ShortURLModel) -> str:
    return json.dumps(
        {
            'id': short_url.id,
            'target': short_url.target,
            'owner_id': short_url.owner_id,
            'creator_address': short_url.creator_address,
            'created_at': dump_datetime(short_url.created_at),
            'expires_at': dump_datetime(short_url.expires_at),
            'is_active': short_url.is_active,
        }
    )


def load_record(
    shortcode: str,
    payload: str,
    clicks: int | str | None = None,
    favorite: int | str | None = None,
    last_clicked: str | None = None,
) -> ShortURLModel:
    data = json.loads(payload)
    return ShortURLModel(
        target=data['target'],
        shortcode=shortcode,
        id=data['id'],
        owner_id=data.get('owner_id'),
        creator_address=data.get('creator_address'),
        clicks=int(clicks or 0),
        created_at=load_datetime(data.get('created_at')),
        expires_at=load_datetime(data.get('expires_at')),
        is_favorite=int(favorite or 0) % 2 == 1,
        is_active=data.get('is_active', True),
        last_clicked_at=load_datetime(last_clicked),
    )


def record_id(payload: str) -> str:
    return json.loads(payload)['id']
