# Log events of the redirect_url lambda
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
INVALID_SHORTCODE = 'INVALID_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
INTERNAL_ERROR = 'INTERNAL_ERROR'
