"""Expiration policy of short URL records

Status is derived lazily, on every read, from the record's absolute expiry and
the current time. Nothing is scheduled: an expired record simply stops
resolving.

    now > expires_at                    -> expired
    expires_at < now + 24h              -> expiring_soon
    otherwise                           -> active

Records without `expires_at` (legacy data created before expiry existed) are
always reported as expired.
"""

from datetime import datetime

from shrinklink.constants import Expiration, EXPIRATION_DURATIONS, DEFAULT_EXPIRATION, EXPIRING_SOON_WINDOW
from shrinklink.exceptions import ValidationError
from shrinklink.models import ShortURLModel, LinkStatus


def parse_expiration(option: str | None) -> Expiration:
    """Return the expiration option named by `option`, the default when it's empty.

    Raises:
        ValidationError: If the option is not one of 5h, 1d, 7d, 14d.
    """
    if option is None or option == '':
        return DEFAULT_EXPIRATION
    try:
        return Expiration(option)
    except ValueError as e:
        allowed = ', '.join(choice.value for choice in Expiration)
        raise ValidationError(f"Unknown expiration option '{option}' (allowed: {allowed}).") from e


def compute_expiry(option: str | None, now: datetime) -> datetime:
    return now + EXPIRATION_DURATIONS[parse_expiration(option)]


def derive_status(record: ShortURLModel, now: datetime) -> LinkStatus:
    expires_at = record.expires_at
    if expires_at is None or now > expires_at:
        return LinkStatus.EXPIRED
    # "<" keeps a freshly created 1d link active (exactly 24h left)
    if expires_at < now + EXPIRING_SOON_WINDOW:
        return LinkStatus.EXPIRING_SOON
    return LinkStatus.ACTIVE


def is_expired(record: ShortURLModel, now: datetime) -> bool:
    return derive_status(record, now) is LinkStatus.EXPIRED
