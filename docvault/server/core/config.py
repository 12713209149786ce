"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_SECRET_KEY = "dev-secret-change-me"

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class StorageConfig(BaseModel):
    """Local file storage configuration."""

    root: str = Field(
        default="storage/app", alias="DOCVAULT_STORAGE_ROOT", description="Root directory of the document storage disk"
    )
    temp_dir: str = Field(
        default="tmp/pdf-splitter",
        alias="DOCVAULT_SPLITTER_TEMP_DIR",
        description="Directory (relative to the storage root) holding PDF splitter temporary files",
    )

    model_config = {"populate_by_name": True}

    @property
    def root_path(self) -> Path:
        """Absolute path of the storage root."""
        return Path(self.root).resolve()


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # DocVault Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="DocVault server host address to bind to",
        alias="DOCVAULT_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="DocVault server port number",
        alias="DOCVAULT_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="DocVault server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="DOCVAULT_LOG_LEVEL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./docvault.db",
        description="Async connection URL for the primary database (documents, categories, users)",
        alias="DATABASE_URL",
    )
    legacy_database_url: str = Field(
        default="sqlite+aiosqlite:///./legacy.db",
        description="Async connection URL for the legacy ERP database (production: mssql+aioodbc://...)",
        alias="LEGACY_DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=False,
        description="Create primary tables on startup (development only, production uses Alembic)",
        alias="DOCVAULT_AUTO_CREATE_TABLES",
    )

    # =====================================================================
    # Storage & CORS (grouped through the properties below)
    # =====================================================================
    storage_root: str = Field(default="storage/app", alias="DOCVAULT_STORAGE_ROOT")
    splitter_temp_dir: str = Field(default="tmp/pdf-splitter", alias="DOCVAULT_SPLITTER_TEMP_DIR")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # =====================================================================
    # Session & Authentication
    # =====================================================================
    session_secret_key: str = Field(
        default=DEFAULT_SESSION_SECRET_KEY,
        description="Secret used to sign the session cookie",
        alias="DOCVAULT_SESSION_SECRET_KEY",
    )
    registration_enabled: bool = Field(
        default=True,
        description="Allow vendors to self-register with their vendor code",
        alias="DOCVAULT_REGISTRATION_ENABLED",
    )

    # =====================================================================
    # Documents
    # =====================================================================
    max_upload_kb: int = Field(
        default=1048576,
        ge=1,
        description="Maximum uploaded PDF size in kilobytes",
        alias="DOCVAULT_MAX_UPLOAD_KB",
    )
    clients_per_page: int = Field(default=15, ge=1, alias="DOCVAULT_CLIENTS_PER_PAGE")
    documents_per_page: int = Field(default=20, ge=1, alias="DOCVAULT_DOCUMENTS_PER_PAGE")
    splitter_temp_ttl_minutes: int = Field(
        default=60,
        ge=1,
        description="Age after which PDF splitter temporary files are deleted",
        alias="DOCVAULT_SPLITTER_TEMP_TTL_MINUTES",
    )

    # =====================================================================
    # Seeding
    # =====================================================================
    seed_admin_password: str = Field(default="admin12345", alias="DOCVAULT_SEED_ADMIN_PASSWORD")
    seed_zone_password: str = Field(default="12345678", alias="DOCVAULT_SEED_ZONE_PASSWORD")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def uses_default_session_secret(self) -> bool:
        """Whether session cookies are signed with the public development secret."""
        return self.session_secret_key == DEFAULT_SESSION_SECRET_KEY

    @property
    def storage(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        return StorageConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
