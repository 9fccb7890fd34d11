# Log events of the reset_anonymous_quota lambda
INVALID_JSON = 'INVALID_JSON'
CONFIRMATION_REQUIRED = 'CONFIRMATION_REQUIRED'
RESET_SUCCESS = 'RESET_SUCCESS'
INTERNAL_ERROR = 'INTERNAL_ERROR'
