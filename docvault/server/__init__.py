"""
DocVault Server Package.

This package contains the web server implementation for DocVault.
It includes the API definition, core service logic, and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Core configurations and constants.
    exception_handlers: Error rendering for validation and unhandled failures.
    middleware: Request logging and timing.
    services: Business logic and service layer (auth, pages, storage, PDF splitting, exports).
"""
