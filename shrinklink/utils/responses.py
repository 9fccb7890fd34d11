"""API Gateway (Lambda Proxy) response builders shared by all handlers"""

import json

from shrinklink.types import LambdaResponse, JsonBody, HttpHeaders
from shrinklink.models import ShortURLModel, LinkStatus, LinkStats
from shrinklink.exceptions import ShrinkLinkError, QuotaExceededError
from shrinklink.utils.runtime import running_locally


# TODO: restrict the allowed origin to the frontend domain once it is deployed
CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,PATCH',
}


def json_response(status_code: int, body: JsonBody, headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_response(error: ShrinkLinkError) -> LambdaResponse:
    """Map an application error onto its conventional HTTP response

    Server-side errors expose their detail only when running locally.
    """
    message = 'Internal Server Error' if error.status_code >= 500 else str(error)
    body = {'message': message, 'errorCode': error.error_code}
    if error.status_code >= 500 and running_locally():
        body['detail'] = str(error)
    if isinstance(error, QuotaExceededError):
        body['current'] = error.current
        body['limit'] = error.limit
    return json_response(error.status_code, body)


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def record_to_json(record: ShortURLModel, *, status: LinkStatus, short_url: str) -> JsonBody:
    return {
        'id': record.id,
        'targetUrl': record.target,
        'shortcode': record.shortcode,
        'shortUrl': short_url,
        'clicks': record.clicks,
        'isFavorite': record.is_favorite,
        'isActive': record.is_active,
        'status': status.value,
        'createdAt': record.created_at.isoformat() if record.created_at else None,
        'expiresAt': record.expires_at.isoformat() if record.expires_at else None,
        'lastClickedAt': record.last_clicked_at.isoformat() if record.last_clicked_at else None,
    }


def stats_to_json(stats: LinkStats) -> JsonBody:
    return {
        'totalUrls': stats.total_urls,
        'totalClicks': stats.total_clicks,
        'activeUrls': stats.active_urls,
        'expiredUrls': stats.expired_urls,
        'expiringUrls': stats.expiring_urls,
        'clickRate': stats.click_rate,
        'avgClicksPerUrl': stats.avg_clicks_per_url,
        'clickedUrls': stats.clicked_urls,
    }
