"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (session,
CORS, request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from docvault.core.database import dispose_engines, init_db
from docvault.core.logging_config import get_logger, setup_logging
from docvault.core.monitoring import initialize_logfire

from .api.v1 import (
    auth,
    categories,
    clients,
    dashboard,
    documents,
    health,
    pdf_splitter,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the primary tables when enabled on startup and releases both
    database connection pools on shutdown.
    """
    # Startup
    if settings.uses_default_session_secret:
        logger.warning(
            "DOCVAULT_SESSION_SECRET_KEY is not set; session cookies are signed with the development default"
        )
    try:
        logger.info("Starting up DocVault Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down DocVault Server...")
    await dispose_engines()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    DocVault Server API

    Document management for the clients of a legacy ERP: PDF documents per client,
    categories, zone-scoped client listings, a completeness matrix export and a PDF splitter.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Set all CORS enabled origins
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)

app.add_middleware(SessionMiddleware, secret_key=settings.session_secret_key, same_site="lax")

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(clients.router)
app.include_router(documents.router)
app.include_router(categories.router)
app.include_router(pdf_splitter.router)


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    uvicorn.run(
        "docvault.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
