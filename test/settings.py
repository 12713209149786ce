"""
Test settings.

Read from ``test/.env`` (optional) and the environment, nested fields use
``__``: ``DATABASE__URL`` sets ``test_settings.database.url``. Both databases
default to in-memory SQLite, so the suite runs without any server.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IN_MEMORY_SQLITE = "sqlite+aiosqlite:///:memory:"


class TestDatabaseConfig(BaseModel):
    url: str = Field(default=IN_MEMORY_SQLITE, description="Primary database (documents, categories, users)")
    legacy_url: str = Field(default=IN_MEMORY_SQLITE, description="Stand-in for the legacy ERP database")


class TestSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    database: TestDatabaseConfig = Field(default_factory=TestDatabaseConfig)
    session_secret_key: str = Field(default="test-session-secret", description="Signs the test session cookies")


@lru_cache
def get_test_settings() -> TestSettings:
    return TestSettings()


test_settings = get_test_settings()
