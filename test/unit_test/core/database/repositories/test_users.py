"""Unit tests for the user repository."""

from __future__ import annotations

import pytest

from docvault.core.database.repositories import UserRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def users(session, make_user) -> UserRepository:
    repository = UserRepository(session)
    for user in (
        make_user("MERIDA", zone="MERIDA"),
        make_user("ADMIN", zone="ADMIN", is_admin=True),
        make_user("JUAN PEREZ", co_ven="V01"),
    ):
        await repository.create(user)
    return repository


class TestUserRepository:
    async def test_get_by_id(self, users):
        user = await users.get_by_name("MERIDA")

        assert (await users.get_by_id(user.id)).name == "MERIDA"
        assert (await users.get_by_id(str(user.id))).name == "MERIDA"
        assert await users.get_by_id(999) is None

    async def test_get_by_name(self, users):
        assert (await users.get_by_name("ADMIN")).is_admin is True
        assert await users.get_by_name("admin") is None

    async def test_get_by_co_ven(self, users):
        assert (await users.get_by_co_ven("V01")).name == "JUAN PEREZ"
        assert await users.get_by_co_ven("V99") is None

    async def test_list_is_ordered_by_name(self, users):
        assert [user.name for user in await users.list()] == ["ADMIN", "JUAN PEREZ", "MERIDA"]
        assert [user.name for user in await users.list(limit=1, offset=1)] == ["JUAN PEREZ"]
