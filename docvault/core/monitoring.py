"""
Monitoring and Tracing Configuration Module.

Optional Pydantic Logfire integration of the DocVault server. When enabled it
traces the FastAPI endpoints and the SQLAlchemy queries, and records:

- request timings reported by the request logging middleware
- document lifecycle events (uploaded, downloaded, deleted)
- errors caught by the exception handlers and the PDF splitter

Nothing is sent unless ``LOGFIRE_ENABLED`` is true and ``LOGFIRE_TOKEN`` is
set. Logfire failures never reach the request: they are logged at DEBUG and
dropped.
"""

import logging
import os
from typing import Any, Callable, Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


LOGFIRE_ENABLED = _flag("LOGFIRE_ENABLED", "false")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_PROJECT_NAME = os.getenv("LOGFIRE_PROJECT_NAME", "docvault")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "docvault-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "1.0.0")

LOGFIRE_TRACE_SQLALCHEMY = _flag("LOGFIRE_TRACE_SQLALCHEMY", "true")
LOGFIRE_TRACE_FASTAPI = _flag("LOGFIRE_TRACE_FASTAPI", "true")


def is_logfire_active() -> bool:
    """Whether events are forwarded to Logfire."""
    return LOGFIRE_ENABLED and bool(LOGFIRE_TOKEN)


def _instrument(target: str, instrument: Callable[[], Any]) -> None:
    try:
        instrument()
        logger.info(f"Logfire: {target} instrumentation enabled")
    except Exception as e:
        logger.warning(f"Failed to instrument {target}: {e}")


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Configure Logfire and instrument the server.

    Args:
        app: The FastAPI application to trace; endpoint tracing is skipped without it.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return
    if not LOGFIRE_TOKEN:
        logger.warning("LOGFIRE_ENABLED is set but LOGFIRE_TOKEN is empty; Logfire stays off.")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    if LOGFIRE_TRACE_SQLALCHEMY:
        _instrument("SQLAlchemy", logfire.instrument_sqlalchemy)
    if LOGFIRE_TRACE_FASTAPI:
        if app is None:
            logger.debug("No FastAPI app given, endpoint tracing skipped")
        else:
            _instrument("FastAPI", lambda: logfire.instrument_fastapi(app=app))

    logger.info(
        f"Logfire monitoring initialized: project={LOGFIRE_PROJECT_NAME}, "
        f"environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}"
    )


def _forward(emit: Callable[..., Any], message: str, **attributes: Any) -> None:
    if not is_logfire_active():
        return
    try:
        emit(message, **attributes)
    except Exception:
        logger.debug(f"Could not send to Logfire: {message}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record the outcome and duration of an API request."""
    _forward(
        logfire.info,
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_document_event(event: str, document_id: int, client_code: str, user_id: Optional[int] = None) -> None:
    """
    Record a document lifecycle event.

    Args:
        event: ``uploaded``, ``downloaded`` or ``deleted``
        document_id: The document identifier
        client_code: Legacy code of the client owning the document
        user_id: The acting user, when known
    """
    _forward(
        logfire.info,
        "Document {event}",
        event=event,
        document_id=document_id,
        client_code=client_code,
        user_id=user_id,
    )


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """Record an error with optional context attributes."""
    _forward(logfire.error, f"{error_type}: {error_message}", **(context or {}))
