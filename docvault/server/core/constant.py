"""Project-wide constants for the DocVault server."""

PROJECT_NAME = "DocVault"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
API_V1_STR = "/api/v1"
