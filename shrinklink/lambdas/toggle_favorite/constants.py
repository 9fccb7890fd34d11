# Log events of the toggle_favorite lambda
UNAUTHENTICATED = 'UNAUTHENTICATED'
MISSING_RECORD_ID = 'MISSING_RECORD_ID'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
FAVORITE_TOGGLED = 'FAVORITE_TOGGLED'
INTERNAL_ERROR = 'INTERNAL_ERROR'
