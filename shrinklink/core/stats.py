import math
from collections.abc import Iterable
from datetime import datetime

from shrinklink.models import ShortURLModel, LinkStats, LinkStatus
from shrinklink.core.expiration import derive_status


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def summarize(records: Iterable[ShortURLModel], now: datetime) -> LinkStats:
    """Summarize a set of records (typically one owner's) at time `now`

    Example:
        >>> summarize([], now)
        LinkStats(total_urls=0, total_clicks=0, active_urls=0, expired_urls=0, expiring_urls=0, click_rate=0, avg_clicks_per_url=0, clicked_urls=0)
    """
    records = list(records)
    total_urls = len(records)
    if total_urls == 0:
        return LinkStats()

    statuses = [derive_status(record, now) for record in records]
    total_clicks = sum(record.clicks for record in records)
    clicked_urls = sum(1 for record in records if record.clicks > 0)

    return LinkStats(
        total_urls=total_urls,
        total_clicks=total_clicks,
        active_urls=statuses.count(LinkStatus.ACTIVE),
        expired_urls=statuses.count(LinkStatus.EXPIRED),
        expiring_urls=statuses.count(LinkStatus.EXPIRING_SOON),
        click_rate=_round_half_up(clicked_urls / total_urls * 100),
        avg_clicks_per_url=_round_half_up(total_clicks / total_urls),
        clicked_urls=clicked_urls,
    )
