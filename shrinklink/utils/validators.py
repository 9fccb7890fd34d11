"""Validation of caller-supplied target URLs, custom slugs and requested short codes

The validate_* functions raise on the first violated rule and return the accepted
value unchanged otherwise.
"""

import re
import ipaddress
from urllib.parse import urlparse

from shrinklink.constants import MAX_URL_LENGTH, ShortCode
from shrinklink.exceptions import ValidationError, ReservedSlugError


SLUG_PATTERN = re.compile(r'[A-Za-z0-9_-]+')
BLOCKED_HOSTNAMES = frozenset({'localhost', 'localhost.localdomain', '0.0.0.0'})


def _is_internal_host(hostname: str) -> bool:
    if hostname.lower() in BLOCKED_HOSTNAMES or hostname.lower().endswith('.localhost'):
        return True
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return address.is_private or address.is_loopback or address.is_link_local or address.is_unspecified


def validate_target_url(url: object, *, production: bool = False) -> str:
    """Validate the long URL of a new short URL record

    Args:
        url: Caller-supplied value.
        production (bool): Reject targets pointing at internal hosts.

    Returns:
        str: The URL, unchanged.

    Raises:
        ValidationError: If the URL is missing, too long or malformed.

    Example:
        >>> validate_target_url('https://example.com/page')
        'https://example.com/page'
        >>> validate_target_url('http://127.0.0.1:8080', production=True)
        ValidationError: Target URL must not point at a local or private address.
    """
    if not url or not isinstance(url, str):
        raise ValidationError("Missing 'targetUrl' in request body.")

    if len(url) > MAX_URL_LENGTH:
        raise ValidationError(f'Target URL is too long (max {MAX_URL_LENGTH} characters).')

    try:
        components = urlparse(url)
        hostname = components.hostname
    except ValueError as e:
        raise ValidationError(f'Invalid target URL format ({e}).') from e

    if components.scheme not in {'http', 'https'}:
        raise ValidationError('Target URL must use the http or https protocol.')
    if not hostname:
        raise ValidationError('Target URL must have a valid domain.')

    if production and _is_internal_host(hostname):
        raise ValidationError('Target URL must not point at a local or private address.')

    return url


def validate_custom_slug(slug: object) -> str:
    """Validate a custom slug, preserving its case

    Raises:
        ValidationError: If the slug has a bad length or charset.
        ReservedSlugError: If the slug is a reserved word (case-insensitive).
    """
    if not isinstance(slug, str):
        raise ValidationError('Custom slug must be a string.')

    if not ShortCode.MIN_LENGTH <= len(slug) <= ShortCode.MAX_LENGTH:
        raise ValidationError(f'Custom slug must be between {ShortCode.MIN_LENGTH} and {ShortCode.MAX_LENGTH} characters.')
    if not SLUG_PATTERN.fullmatch(slug):
        raise ValidationError('Custom slug can only contain letters, numbers, hyphens and underscores.')
    if slug.lower() in ShortCode.RESERVED:
        raise ReservedSlugError(slug)

    return slug


def is_valid_shortcode(shortcode: object) -> bool:
    """Check the format of a short code requested for redirection

    Generated codes and custom slugs share the same alphabet, so anything
    outside of it (e.g. 'abc123:clicks') can't name a record.

    Example:
        >>> is_valid_shortcode('my-link')
        True
        >>> is_valid_shortcode('abc123:clicks')
        False
    """
    if not isinstance(shortcode, str) or len(shortcode) > ShortCode.MAX_LENGTH:
        return False
    return SLUG_PATTERN.fullmatch(shortcode) is not None
