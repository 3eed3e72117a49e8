"""API middleware."""

from kycgate.api.middleware.error_handler import ErrorHandlerMiddleware
from kycgate.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
