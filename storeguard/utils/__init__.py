from .helpers import (
    enum_value,
    success_response,
    error_response,
)
from .logger import Logger
from .exceptions import (
    PolicyConfigurationError,
    PermissionDeniedError,
    NotFoundError,
)

__all__ = [
    "enum_value",
    "success_response",
    "error_response",
    "Logger",
    "PolicyConfigurationError",
    "PermissionDeniedError",
    "NotFoundError",
]
