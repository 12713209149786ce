from __future__ import annotations

import os
from pathlib import Path

import pytest

# Load dotenv files early so the settings below see local overrides
from dotenv import load_dotenv

TEST_ROOT = Path(__file__).resolve().parent
load_dotenv(TEST_ROOT / ".env", override=False)

from test.settings import test_settings  # noqa: E402

# The application builds its engines and settings at import time: point them at test resources first
os.environ["DATABASE_URL"] = test_settings.database.url
os.environ["LEGACY_DATABASE_URL"] = test_settings.database.legacy_url
os.environ["DOCVAULT_SESSION_SECRET_KEY"] = test_settings.session_secret_key
os.environ.setdefault("DOCVAULT_AUTO_CREATE_TABLES", "false")
os.environ.setdefault("ENABLE_FILE_LOGGING", "false")
os.environ.setdefault("LOGFIRE_ENABLED", "false")


@pytest.fixture(scope="session")
def test_config():
    """The test settings (databases and session secret)."""
    return test_settings


@pytest.fixture(autouse=True)
def _isolated_storage_root(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Keep the configured storage disk out of the working tree."""
    from docvault.server.core.config import settings

    monkeypatch.setattr(settings, "storage_root", str(tmp_path_factory.mktemp("storage-root")))
