# Log events of the shorten_url lambda
INVALID_JSON = 'INVALID_JSON'
INVALID_REQUEST = 'INVALID_REQUEST'
ANONYMOUS_QUOTA_EXCEEDED = 'ANONYMOUS_QUOTA_EXCEEDED'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
INTERNAL_ERROR = 'INTERNAL_ERROR'
