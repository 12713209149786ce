"""Unit tests for the legacy client and lookup repositories."""

from __future__ import annotations

import pytest
from sqlalchemy import event

from docvault.core.database.repositories import LegacyClientRepository, LegacyLookupRepository
from docvault.core.database.repositories.clients import (
    FILES_WITH,
    FILES_WITHOUT,
    STATUS_ACTIVE,
    STATUS_INACTIVE,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def clients(legacy_data) -> LegacyClientRepository:
    return LegacyClientRepository(legacy_data)


@pytest.fixture
def lookups(legacy_data) -> LegacyLookupRepository:
    return LegacyLookupRepository(legacy_data)


def _codes(clients_list):
    return [client.co_cli for client in clients_list]


class TestLegacyLookupRepository:
    async def test_segments_are_trimmed(self, lookups):
        segments = await lookups.segments()

        assert ("01", "01) MERIDA CENTRO") in segments
        assert len(segments) == 5

    async def test_zone_segment_codes(self, lookups):
        assert await lookups.zone_segment_codes("MERIDA") == {"01", "02"}
        assert await lookups.zone_segment_codes("tachira") == {"03"}
        assert await lookups.zone_segment_codes("CARACAS") == set()

    async def test_find_active_vendor(self, lookups):
        assert (await lookups.find_active_vendor("V01")).ven_des == "JUAN PEREZ"
        assert await lookups.find_active_vendor("V02") is None
        assert await lookups.find_active_vendor("V99") is None

    async def test_get_by_id(self, lookups):
        assert (await lookups.get_by_id("02")).seg_des == "MERIDA-NORTE"


class TestAccessScoping:
    async def test_admin_sees_everything(self, clients, make_user):
        admin = make_user("ADMIN", zone="ADMIN", is_admin=True)

        assert await clients.access_condition(admin) is None
        page = await clients.paginate(admin, page=1, per_page=15)
        assert _codes(page.items) == ["C001", "C002", "C004", "C003"]

    async def test_zone_manager_sees_zone_segments(self, clients, make_user):
        merida = make_user("MERIDA", zone="MERIDA")

        page = await clients.paginate(merida, page=1, per_page=15)

        assert _codes(page.items) == ["C001", "C002"]

    async def test_vendor_sees_own_clients(self, clients, make_user):
        vendor = make_user("JUAN PEREZ", co_ven="V01")

        page = await clients.paginate(vendor, page=1, per_page=15)

        assert _codes(page.items) == ["C001", "C003"]

    async def test_zone_without_segments_sees_nothing(self, clients, make_user):
        nowhere = make_user("ANDES", zone="ANDES")

        assert (await clients.paginate(nowhere, page=1, per_page=15)).total == 0

    async def test_user_without_zone_or_vendor_sees_nothing(self, clients, make_user):
        assert (await clients.paginate(make_user("NOBODY"), page=1, per_page=15)).total == 0

    async def test_get_accessible(self, clients, make_user):
        merida = make_user("MERIDA", zone="MERIDA")

        assert (await clients.get_accessible(merida, "C002")).cli_des == "BETA DROGUERIA"
        assert await clients.get_accessible(merida, "C003") is None
        assert await clients.get_accessible(merida, "C999") is None


class TestClientFilters:
    @pytest.fixture
    def admin(self, make_user):
        return make_user("ADMIN", zone="ADMIN", is_admin=True)

    @pytest.mark.parametrize(
        "search,expected",
        [("acme", ["C001"]), ("c00", ["C001", "C002", "C004", "C003"]), ("J-004", ["C004"]), ("zzz", [])],
    )
    async def test_search(self, clients, admin, search, expected):
        assert _codes((await clients.paginate(admin, 1, 15, search=search)).items) == expected

    async def test_status(self, clients, admin):
        active = await clients.paginate(admin, 1, 15, status=STATUS_ACTIVE)
        inactive = await clients.paginate(admin, 1, 15, status=STATUS_INACTIVE)

        assert _codes(active.items) == ["C001", "C002", "C004"]
        assert _codes(inactive.items) == ["C003"]

    async def test_file_status(self, clients, admin):
        with_files = await clients.paginate(admin, 1, 15, file_status=FILES_WITH, codes_with_files={"C002"})
        without_files = await clients.paginate(admin, 1, 15, file_status=FILES_WITHOUT, codes_with_files={"C002"})
        none_with_files = await clients.paginate(admin, 1, 15, file_status=FILES_WITH, codes_with_files=set())

        assert _codes(with_files.items) == ["C002"]
        assert _codes(without_files.items) == ["C001", "C004", "C003"]
        assert none_with_files.total == 0

    async def test_file_status_with_many_codes(self, clients, admin, legacy_engine):
        codes = {"C002"} | {f"X{index:05d}" for index in range(3000)}
        parameters = []

        def record(conn, cursor, statement, params, context, executemany):
            parameters.append(params)

        event.listen(legacy_engine.sync_engine, "before_cursor_execute", record)
        try:
            with_files = await clients.paginate(admin, 1, 15, file_status=FILES_WITH, codes_with_files=codes)
            without_files = await clients.paginate(admin, 1, 15, file_status=FILES_WITHOUT, codes_with_files=codes)
        finally:
            event.remove(legacy_engine.sync_engine, "before_cursor_execute", record)

        assert _codes(with_files.items) == ["C002"]
        assert _codes(without_files.items) == ["C001", "C004", "C003"]
        # The codes are inlined, so the statements stay far below the SQL Server parameter cap
        assert parameters
        assert max(len(params) for params in parameters) < 100

    async def test_pagination(self, clients, admin):
        page = await clients.paginate(admin, page=2, per_page=3)

        assert page.total == 4
        assert _codes(page.items) == ["C003"]


class TestClientLookups:
    async def test_get_by_id(self, clients):
        assert (await clients.get_by_id("C001")).cli_des == "ACME FARMACIA"
        assert await clients.get_by_id("C999") is None

    async def test_get_many(self, clients):
        found = await clients.get_many(["C001", "C004", "C999"])

        assert sorted(found) == ["C001", "C004"]
        assert await clients.get_many([]) == {}

    async def test_active_options(self, clients, make_user):
        vendor = make_user("JUAN PEREZ", co_ven="V01")

        assert _codes(await clients.active_options(vendor)) == ["C001"]

    async def test_count_active(self, clients):
        assert await clients.count_active() == 3

    async def test_codes_matching(self, clients):
        assert sorted(await clients.codes_matching("drog")) == ["C002"]
        assert sorted(await clients.codes_matching("c00")) == ["C001", "C002", "C003", "C004"]
