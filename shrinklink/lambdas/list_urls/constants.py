# Log events of the list_urls lambda
UNAUTHENTICATED = 'UNAUTHENTICATED'
LIST_SUCCESS = 'LIST_SUCCESS'
INTERNAL_ERROR = 'INTERNAL_ERROR'
