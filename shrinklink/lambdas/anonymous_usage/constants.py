# Log events of the anonymous_usage lambda
USAGE_SUCCESS = 'USAGE_SUCCESS'
INTERNAL_ERROR = 'INTERNAL_ERROR'
