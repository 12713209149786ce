"""
Logging Configuration Module.

Central logging setup of DocVault, applied through ``logging.config.dictConfig``:

- one console handler filtered at the configured level
- an optional rotating ``docvault.log`` file that always records DEBUG
- per-module levels, quieting the chatty third-party libraries

Environment:
    DOCVAULT_LOG_LEVEL: console level (read through the server settings)
    LOG_FORMAT: ``simple``, ``detailed`` (default) or ``json``
    LOG_FILE_DIR: directory of ``docvault.log`` (default ``logs``)
    ENABLE_FILE_LOGGING: ``true`` (default) or ``false``
"""

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

LOG_FILE_NAME = "docvault.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _default_level() -> str:
    # The settings import is deferred: the server config module logs through this one
    try:
        from docvault.server.core.config import settings

        return settings.log_level.upper()
    except Exception:
        return os.getenv("DOCVAULT_LOG_LEVEL", "INFO").upper()


LOG_LEVEL = _default_level()
LOG_FORMAT = os.getenv("LOG_FORMAT", "detailed")
LOG_FILE_DIR = os.getenv("LOG_FILE_DIR", "logs")
ENABLE_FILE_LOGGING = _env_flag("ENABLE_FILE_LOGGING", "true")


SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}


MODULE_LOG_LEVELS = {
    "docvault.core": "INFO",
    "docvault.core.database": "INFO",
    "docvault.core.storage": "DEBUG",
    "docvault.server": "INFO",
    "docvault.server.api": "DEBUG",
    "docvault.server.services": "DEBUG",
    "docvault.server.core": "INFO",
    # Third-party libraries
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "fitz": "WARNING",
    "multipart": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def build_logging_config(level: str, log_format: str, log_file: Optional[Path] = None) -> Dict[str, Any]:
    """
    Build the ``dictConfig`` schema for the given console level and format.

    Args:
        level: Console log level
        log_format: ``simple``, ``detailed`` or ``json``; anything else means ``detailed``
        log_file: Path of the rotating log file, or ``None`` for console only
    """
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {"class": "logging.StreamHandler", "level": level, "formatter": "default"},
    }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filename": str(log_file),
            "maxBytes": LOG_FILE_MAX_BYTES,
            "backupCount": LOG_FILE_BACKUPS,
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": FORMATS.get(log_format, DETAILED_FORMAT), "datefmt": DATE_FORMAT}},
        "handlers": handlers,
        # Root lets everything through, handlers do the filtering
        "root": {"level": "DEBUG", "handlers": list(handlers)},
        "loggers": {name: {"level": module_level} for name, module_level in MODULE_LOG_LEVELS.items()},
    }


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Existing root handlers are replaced, so calling this again reconfigures
    logging instead of duplicating output.

    Args:
        log_level: Override the console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Override the format (simple, detailed, json)
        enable_file: Whether to write ``docvault.log`` when file logging is enabled
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT

    log_file = None
    if enable_file and ENABLE_FILE_LOGGING:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME

    logging.config.dictConfig(build_logging_config(level, fmt, log_file))
    logging.getLogger(__name__).info(
        f"Logging configured: level={level}, format={fmt}, file={log_file or 'disabled'}"
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)
