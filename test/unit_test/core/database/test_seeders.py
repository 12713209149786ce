"""Unit tests for the zone user seeder."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from docvault.core.database.repositories import UserRepository
from docvault.core.database.seeders import seed_zone_users

pytestmark = pytest.mark.asyncio


@pytest.fixture(autouse=True)
def fast_hashing():
    with patch("docvault.core.database.seeders.hash_password", side_effect=lambda password: f"hashed:{password}"):
        yield


class TestSeedZoneUsers:
    async def test_creates_admin_and_zone_users(self, session, legacy_data):
        report = await seed_zone_users(session, legacy_data, admin_password="admin-pw", zone_password="zone-pw")

        assert report.created == ["ADMIN", "MERIDA", "TACHIRA"]
        assert report.existing == []

        users = UserRepository(session)
        admin = await users.get_by_name("ADMIN")
        merida = await users.get_by_name("MERIDA")
        assert admin.is_admin is True
        assert admin.zone == "ADMIN"
        assert admin.password_hash == "hashed:admin-pw"
        assert merida.zone == "MERIDA"
        assert merida.is_admin is False
        assert merida.password_hash == "hashed:zone-pw"

    async def test_is_idempotent(self, session, legacy_data):
        await seed_zone_users(session, legacy_data, admin_password="a", zone_password="z")

        report = await seed_zone_users(session, legacy_data, admin_password="a", zone_password="z")

        assert report.created == []
        assert report.existing == ["ADMIN", "MERIDA", "TACHIRA"]
        assert len(await UserRepository(session).list()) == 3
