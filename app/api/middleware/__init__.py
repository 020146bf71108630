"""
HTTP middleware for PetVally: error handling, request logging and the browser page gate.
"""

from .authentication import PageGateMiddleware
from .error_handling import ErrorHandlingMiddleware, register_exception_handlers
from .logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "PageGateMiddleware",
    "RequestLoggingMiddleware",
    "register_exception_handlers",
]
