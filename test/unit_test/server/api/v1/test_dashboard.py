"""Unit tests for the dashboard endpoint."""

import pytest

pytestmark = pytest.mark.asyncio


class TestDashboard:
    async def test_requires_login(self, client):
        assert (await client.get("/dashboard")).status_code == 401

    async def test_empty_vault(self, client, login):
        await login("MERIDA")

        body = (await client.get("/dashboard")).json()

        assert body["component"] == "dashboard"
        assert body["props"]["stats"] == {
            "total_clients": 3,
            "total_documents": 0,
            "total_storage": 0,
            "formatted_storage": "0 B",
            "total_downloads": 0,
        }
        assert body["props"]["recent_documents"] == []
        assert body["props"]["top_clients"] == []
        assert body["props"]["categories_distribution"] == []

    async def test_statistics(self, client, login, add_category, add_document):
        contracts = await add_category("Contracts")
        await add_document("C001", "Lease", category=contracts, downloaded_count=2)
        await add_document("C001", "Permit", category=contracts)
        await add_document("C002", "Invoice")
        await add_document("C999", "Orphan")
        await login("MERIDA")

        props = (await client.get("/dashboard")).json()["props"]

        assert props["stats"]["total_documents"] == 4
        assert props["stats"]["total_downloads"] == 2
        assert props["stats"]["total_storage"] > 0
        assert len(props["recent_documents"]) == 3
        recent_clients = {doc["client"]["code"]: doc["client"]["name"] for doc in props["recent_documents"]}
        assert recent_clients["C999"] == "Unknown"
        assert all(doc["created_at"] for doc in props["recent_documents"])
        assert [(top["code"], top["documents_count"]) for top in props["top_clients"]] == [("C001", 2), ("C002", 1)]
        assert props["top_clients"][0]["name"] == "ACME FARMACIA"
        assert props["categories_distribution"] == [{"category": "Contracts", "count": 2}]
