"""API middleware."""

from purchasing.api.middleware.error_handler import ErrorHandlerMiddleware
from purchasing.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
