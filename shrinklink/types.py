from datetime import datetime
from typing import Any
from collections.abc import Callable


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type LambdaConfiguration = dict[str, Any]
type AppConfig = dict[str, Any]
type HttpHeaders = dict[str, str]
type JsonBody = dict[str, Any]

# Source of the current time; injectable so lifecycle checks can be tested without sleeping
type Clock = Callable[[], datetime]
