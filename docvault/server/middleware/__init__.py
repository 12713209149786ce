"""
Middleware modules for the DocVault server.

This package contains custom middleware for request/response logging
and other cross-cutting concerns.
"""

from .request_logging_middleware import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
