"""Unit tests for the request dependencies."""

from pathlib import Path

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from docvault.core.database.repositories import UserRepository
from docvault.server.core.config import settings
from docvault.server.services.deps import (
    SESSION_USER_KEY,
    get_admin_user,
    get_current_user,
    get_pdf_splitter,
    get_storage,
)


def _request(session: dict) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": [], "session": session})


class TestCurrentUser:
    @pytest.mark.asyncio
    async def test_resolves_session_user(self, session, make_user):
        user = make_user("MERIDA", zone="MERIDA")
        session.add(user)
        await session.commit()

        resolved = await get_current_user(_request({SESSION_USER_KEY: user.id}), UserRepository(session))

        assert resolved.id == user.id

    @pytest.mark.asyncio
    async def test_no_session(self, session):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_request({}), UserRepository(session))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Unauthenticated."

    @pytest.mark.asyncio
    async def test_stale_session_is_cleared(self, session):
        session_data = {SESSION_USER_KEY: 42, "_flash": {"success": "x"}}

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_request(session_data), UserRepository(session))

        assert exc_info.value.status_code == 401
        assert session_data == {}


class TestAdminUser:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(("zone", "is_admin"), [("ADMIN", False), ("MERIDA", True), ("admin", False)])
    async def test_administrators(self, make_user, zone, is_admin):
        user = make_user("X", zone=zone, is_admin=is_admin)

        assert await get_admin_user(user) is user

    @pytest.mark.asyncio
    async def test_others_are_forbidden(self, make_user):
        with pytest.raises(HTTPException) as exc_info:
            await get_admin_user(make_user("JUAN PEREZ", co_ven="V01"))

        assert exc_info.value.status_code == 403


class TestStorageDependencies:
    def test_storage_uses_configured_root(self):
        assert get_storage().root == Path(settings.storage_root).resolve()

    def test_splitter_uses_configured_temp_dir(self, storage):
        splitter = get_pdf_splitter(storage)

        assert splitter.storage is storage
        assert splitter.temp_dir == settings.storage.temp_dir.strip("/")
        assert splitter.ttl_seconds == settings.splitter_temp_ttl_minutes * 60
