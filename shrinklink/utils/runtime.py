"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    get_user_id(event) -> str | None:
        Amazon Cognito `sub` claim of the caller, None for anonymous callers.
    normalize_address(address) -> str:
        Strip the IPv4-mapped IPv6 prefix from an address.
    get_origin_address(event) -> str:
        Normalized network address of the caller.
    get_creator_identity(event) -> CreatorIdentity:
        Owned(user id) for authenticated callers, Anonymous(address) otherwise.

Example:
    >>> from shrinklink.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from shrinklink.types import LambdaEvent
from shrinklink.constants import ENV, DEFAULT_ORIGIN_ADDRESS, IPV4_MAPPED_PREFIX
from shrinklink.models import Owned, Anonymous, CreatorIdentity


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def normalize_address(address: str) -> str:
    address = address.strip()
    if address.lower().startswith(IPV4_MAPPED_PREFIX):
        return address[len(IPV4_MAPPED_PREFIX) :]
    return address


def get_user_id(event: LambdaEvent) -> str | None:
    claims = (event.get('requestContext') or {}).get('authorizer', {}).get('claims', {})
    return claims.get('sub') or None


def _header(event: LambdaEvent, name: str) -> str | None:
    # API Gateway keeps header names as sent by the client
    for key, value in (event.get('headers') or {}).items():
        if key.lower() == name:
            return value
    return None


def get_origin_address(event: LambdaEvent) -> str:
    """Extract the caller's network address from an API Gateway event

    Lookup order: API Gateway source IP, first `X-Forwarded-For` entry,
    `X-Real-IP`, then 127.0.0.1. IPv4-mapped IPv6 addresses are unwrapped.
    """
    identity = (event.get('requestContext') or {}).get('identity', {})
    forwarded_for = _header(event, 'x-forwarded-for')

    address = (
        identity.get('sourceIp')
        or (forwarded_for.split(',')[0].strip() if forwarded_for else None)
        or _header(event, 'x-real-ip')
        or DEFAULT_ORIGIN_ADDRESS
    )
    return normalize_address(address)


def get_creator_identity(event: LambdaEvent) -> CreatorIdentity:
    user_id = get_user_id(event)
    if user_id is not None:
        return Owned(user_id)
    return Anonymous(get_origin_address(event))
