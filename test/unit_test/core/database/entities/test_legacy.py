"""Unit tests for the legacy ERP entities and their text cleaning."""

from __future__ import annotations

import pytest
from sqlmodel import select

from docvault.core.database.base import LegacyText, clean_legacy_text
from docvault.core.database.entities.legacy import LegacyClient, Segment, Vendor


class TestCleanLegacyText:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, None),
            ("  ACME  ", "ACME"),
            ("", ""),
            (b"CAF\xc9 ", "CAFÉ"),
            (bytearray(b"MERIDA  "), "MERIDA"),
            (memoryview(b"V01 "), "V01"),
            (42, 42),
        ],
    )
    def test_clean_legacy_text(self, value, expected):
        assert clean_legacy_text(value) == expected

    def test_type_decorator_cleans_results(self):
        assert LegacyText(20).process_result_value("  C001 ", dialect=None) == "C001"


class TestLegacyEntities:
    async def test_values_are_trimmed_on_load(self, legacy_data):
        client = (await legacy_data.execute(select(LegacyClient).where(LegacyClient.co_cli == "C001"))).scalar_one()
        segment = (await legacy_data.execute(select(Segment).where(Segment.co_seg == "01"))).scalar_one()
        vendor = (await legacy_data.execute(select(Vendor).where(Vendor.co_ven == "V01"))).scalar_one()

        assert client.cli_des == "ACME FARMACIA"
        assert segment.seg_des == "01) MERIDA CENTRO"
        assert vendor.ven_des == "JUAN PEREZ"

    async def test_is_active(self, legacy_data):
        rows = (await legacy_data.execute(select(LegacyClient).order_by(LegacyClient.co_cli))).scalars().all()

        assert {client.co_cli: client.is_active for client in rows} == {
            "C001": True,
            "C002": True,
            "C003": False,
            "C004": True,
        }

    def test_legacy_tables_use_their_own_metadata(self):
        from docvault.core.database.base import Base, LegacyBase

        assert "clientes" in LegacyBase.metadata.tables
        assert "clientes" not in Base.metadata.tables
        assert "documents" in Base.metadata.tables
        assert "documents" not in LegacyBase.metadata.tables
