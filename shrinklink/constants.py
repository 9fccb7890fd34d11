import string
from datetime import timedelta
from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    ONE_HOUR = 3_600
    ONE_DAY = 86_400  # 60 * 60 * 24
    # Grace period during which an expired record still resolves to 410 Gone (30 days in seconds)
    RETENTION = 2_592_000  # 60 * 60 * 24 * 30


class Expiration(StrEnum):
    """Expiration options accepted on link creation."""

    FIVE_HOURS = '5h'
    ONE_DAY = '1d'
    SEVEN_DAYS = '7d'
    FOURTEEN_DAYS = '14d'


EXPIRATION_DURATIONS = {
    Expiration.FIVE_HOURS: timedelta(hours=5),
    Expiration.ONE_DAY: timedelta(days=1),
    Expiration.SEVEN_DAYS: timedelta(days=7),
    Expiration.FOURTEEN_DAYS: timedelta(days=14),
}
DEFAULT_EXPIRATION = Expiration.FOURTEEN_DAYS

# Records expiring within this window are reported as 'expiring_soon'
EXPIRING_SOON_WINDOW = timedelta(hours=24)


class DefaultQuota:
    """Default quota values."""

    ANONYMOUS_LINKS = 3  # Links an anonymous origin address may create


class ShortCode:
    """Short code constraints."""

    ALPHABET = string.ascii_letters + string.digits + '_-'
    DEFAULT_LENGTH = 7
    MIN_LENGTH = 3
    MAX_LENGTH = 50
    ATTEMPTS_PER_LENGTH = 10  # Collisions tolerated before widening the code by one character
    MAX_WIDENINGS = 3
    RESERVED = frozenset({'api', 'admin', 'www', 'mail', 'ftp', 'localhost', 'health', 'auth', 'create', 'urls'})


MAX_URL_LENGTH = 2048
DEFAULT_ORIGIN_ADDRESS = '127.0.0.1'
IPV4_MAPPED_PREFIX = '::ffff:'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


PRODUCTION_ENVIRONMENTS = frozenset({'prod', 'production'})

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
