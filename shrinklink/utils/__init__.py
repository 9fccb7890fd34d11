from shrinklink.utils.config import app_env, app_name, app_prefix, is_production, load_config, redis_config
from shrinklink.utils.helpers import base_url, get_short_url, utcnow, require_environment, guarantee_500_response
from shrinklink.utils.runtime import running_locally, get_user_id, get_origin_address, get_creator_identity
from shrinklink.utils.shortener import generate_shortcode
from shrinklink.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'is_production',
    'load_config',
    'redis_config',
    'base_url',
    'get_short_url',
    'utcnow',
    'require_environment',
    'guarantee_500_response',
    'running_locally',
    'get_user_id',
    'get_origin_address',
    'get_creator_identity',
    'initialize_logging',
]
