"""
Exception handlers for the DocVault server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .global_handler import setup_exception_handlers
from .validation_handler import FormValidationError, errors_from_pydantic

__all__ = ["FormValidationError", "errors_from_pydantic", "setup_exception_handlers"]
