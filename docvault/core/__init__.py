"""
Core utilities and configuration for DocVault.

This package provides core functionality including logging configuration,
database setup, storage and other shared utilities.
"""

from docvault.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
