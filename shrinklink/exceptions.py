"""Application-specific exceptions.

Every exception carries a stable `error_code` and the HTTP `status_code`
conventionally used by the Lambda handlers when surfacing it to a caller.

Classes:
    ShrinkLinkError:
        Base class for all application errors.

    ValidationError, ReservedSlugError, SlugTakenError:
        Malformed input or custom slug conflicts (400).

    UnauthenticatedError:
        The operation requires an authenticated identity (401).

    NotFoundError, AccessDeniedError:
        Missing records and ownership violations (404). An ownership violation
        is deliberately indistinguishable from a missing record.

    GoneError:
        The record exists but has expired or was disabled (410).

    QuotaExceededError:
        Anonymous creation limit reached for an origin address (429).

    InternalError, ShortCodeAllocationError:
        Storage failures and exhausted allocation retries (500).

    ConfigurationError, MissingEnvironmentVariableError, BadConfigurationError,
    InfrastructureError, AppConfigError:
        Configuration and infrastructure problems (500).
"""


class ShrinkLinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shrinklink_error'
    status_code = 500


class ValidationError(ShrinkLinkError):
    """Raised when caller input is malformed."""

    error_code = 'validation:invalid_input'
    status_code = 400


class ReservedSlugError(ValidationError):
    """Raised when a custom slug is one of the reserved words."""

    error_code = 'validation:reserved_slug'

    def __init__(self, slug: str):
        super().__init__(f"Custom slug '{slug}' is reserved and cannot be used.")
        self.slug = slug


class SlugTakenError(ValidationError):
    """Raised when a custom slug is already in use."""

    error_code = 'validation:slug_taken'

    def __init__(self, slug: str):
        super().__init__(f"Custom slug '{slug}' is already taken.")
        self.slug = slug


class UnauthenticatedError(ShrinkLinkError):
    """Raised when an operation requires an authenticated user."""

    error_code = 'auth:unauthenticated'
    status_code = 401


class NotFoundError(ShrinkLinkError):
    """Raised when a record does not exist."""

    error_code = 'links:not_found'
    status_code = 404


class AccessDeniedError(NotFoundError):
    """Raised when the acting user does not own the record.

    Shares the status code and message shape of NotFoundError so callers
    cannot enumerate records owned by somebody else.
    """

    error_code = 'links:not_found'


class GoneError(ShrinkLinkError):
    """Raised when a record exists but can no longer be resolved."""

    error_code = 'links:gone'
    status_code = 410


class QuotaExceededError(ShrinkLinkError):
    """Raised when an origin address has used up its anonymous link quota."""

    error_code = 'quota:anonymous_quota_exceeded'
    status_code = 429

    def __init__(self, current: int, limit: int):
        super().__init__(f'Anonymous link quota exceeded ({current}/{limit}). Sign in to create more links.')
        self.current = current
        self.limit = limit


class InternalError(ShrinkLinkError):
    """Raised on storage failures and other unrecoverable internal errors."""

    error_code = 'app:internal_error'


class ShortCodeAllocationError(InternalError):
    """Raised when no free short code could be allocated within the retry bound."""

    error_code = 'app:short_code_allocation_error'


class ConfigurationError(ShrinkLinkError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(ShrinkLinkError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig responds with erroneous data."""

    error_code = 'infra:appconfig_error'
