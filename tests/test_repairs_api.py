"""
Repair, expense, catalog and backup endpoint tests.
"""

import json

import pytest
from httpx import AsyncClient


async def _ali_with_samsung(client: AsyncClient) -> tuple[dict, dict]:
    response = await client.post("/api/v1/clients", json={"name": "Ali", "phone": "0100000000"})
    ali = response.json()
    response = await client.post(
        "/api/v1/devices",
        json={"clientId": ali["id"], "brand": "Samsung", "model": "A54"},
    )
    return ali, response.json()


@pytest.mark.asyncio
async def test_repair_lifecycle_and_client_cascade(client: AsyncClient, clock):
    """Test total, completion stamping and deletion of the owner."""
    ali, device = await _ali_with_samsung(client)

    response = await client.post(
        "/api/v1/repairs",
        json={
            "deviceId": device["id"],
            "costParts": 100,
            "costServices": 50,
            "costOther": 0,
            "status": "PENDING",
        },
    )
    assert response.status_code == 201
    repair = response.json()
    assert repair["totalCost"] == 150
    assert repair["clientId"] == ali["id"]
    assert repair["completionDate"] is None

    clock.set(2024, 5, 16, 14, 30)
    response = await client.patch(f"/api/v1/repairs/{repair['id']}", json={"status": "DONE"})
    assert response.status_code == 200
    done = response.json()
    assert done["completionDate"].startswith("2024-05-16T14:30:00")
    assert done["totalCost"] == 150

    response = await client.delete(f"/api/v1/clients/{ali['id']}")
    assert response.status_code == 200
    assert response.json()["removedRepairs"] == 1

    assert (await client.get(f"/api/v1/devices/{device['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/repairs/{repair['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_repair_update_recomputes_total(client: AsyncClient):
    """Test cost edits re-derive the total and ignore a sent total."""
    _, device = await _ali_with_samsung(client)
    response = await client.post(
        "/api/v1/repairs",
        json={"deviceId": device["id"], "costParts": 100, "parts": "Écran, Batterie"},
    )
    repair = response.json()
    assert repair["parts"] == ["Écran", "Batterie"]

    response = await client.patch(
        f"/api/v1/repairs/{repair['id']}",
        json={"costOther": 20.5, "paidAmount": 60},
    )

    data = response.json()
    assert data["totalCost"] == 120.5
    assert data["paidAmount"] == 60


@pytest.mark.asyncio
async def test_repair_rejects_negative_cost(client: AsyncClient):
    """Test costs cannot be negative."""
    response = await client.post("/api/v1/repairs", json={"deviceId": "D1", "costParts": -5})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_repairs_filters(client: AsyncClient):
    """Test status and device filters."""
    _, device = await _ali_with_samsung(client)
    await client.post("/api/v1/repairs", json={"deviceId": device["id"], "problem": "Écran cassé"})
    await client.post(
        "/api/v1/repairs",
        json={"deviceId": device["id"], "problem": "Batterie", "status": "IN_PROGRESS"},
    )
    await client.post("/api/v1/repairs", json={"deviceId": "OTHER", "problem": "Micro"})

    response = await client.get("/api/v1/repairs", params={"status": "IN_PROGRESS"})
    assert [r["problem"] for r in response.json()["items"]] == ["Batterie"]

    response = await client.get("/api/v1/repairs", params={"deviceId": device["id"]})
    assert response.json()["total"] == 2

    response = await client.get("/api/v1/repairs", params={"search": "écran"})
    assert response.json()["total"] == 1

    response = await client.get(f"/api/v1/devices/{device['id']}/repairs")
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_expense_crud(client: AsyncClient):
    """Test expense creation, filtering and deletion."""
    response = await client.post(
        "/api/v1/expenses",
        json={"title": "Loyer", "amount": 300, "category": "RENT"},
    )
    assert response.status_code == 201
    expense = response.json()
    assert expense["date"].startswith("2024-05-15")

    await client.post("/api/v1/expenses", json={"title": "Écran A54", "amount": "45.5", "category": "PARTS"})

    response = await client.get("/api/v1/expenses", params={"category": "PARTS"})
    assert [e["amount"] for e in response.json()["items"]] == [45.5]

    response = await client.delete(f"/api/v1/expenses/{expense['id']}")
    assert response.json()["removedExpenses"] == 1


@pytest.mark.asyncio
async def test_catalog_endpoints(client: AsyncClient):
    """Test catalog read, replace and file import."""
    response = await client.get("/api/v1/catalog")
    assert response.json()["brandCount"] == 5

    response = await client.put("/api/v1/catalog", json=[{"brand": "Nokia", "models": ["3310"]}])
    assert response.json()["entries"] == [{"brand": "Nokia", "models": ["3310"]}]

    response = await client.post(
        "/api/v1/catalog/import",
        files={"file": ("catalog.json", b'{"brand": "Apple"}', "application/json")},
    )
    assert response.status_code == 400

    response = await client.get("/api/v1/catalog")
    assert response.json()["modelCount"] == 1


@pytest.mark.asyncio
async def test_backup_export_and_import(client: AsyncClient):
    """Test full export download then restore."""
    ali, _ = await _ali_with_samsung(client)

    response = await client.get("/api/v1/backup/export")
    assert response.status_code == 200
    assert 'filename="RepairDesk_Full_Backup_2024-05-15.json"' in response.headers["content-disposition"]
    backup = response.content

    response = await client.get("/api/v1/backup/status")
    assert response.json()["isStale"] is False
    assert response.json()["ageDays"] == 0

    await client.delete(f"/api/v1/clients/{ali['id']}")

    response = await client.post(
        "/api/v1/backup/import",
        files={"file": ("backup.json", backup, "application/json")},
    )
    assert response.status_code == 200
    assert response.json()["clients"] == 1
    assert response.json()["devices"] == 1

    response = await client.get(f"/api/v1/clients/{ali['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_backup_import_rejects_foreign_file(client: AsyncClient):
    """Test a file without any primary collection is rejected."""
    ali, _ = await _ali_with_samsung(client)

    response = await client.post(
        "/api/v1/backup/import",
        files={"file": ("foo.json", json.dumps({"foo": []}).encode(), "application/json")},
    )

    assert response.status_code == 400
    assert "detail" in response.json()
    response = await client.get(f"/api/v1/clients/{ali['id']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_backup_table_export(client: AsyncClient):
    """Test per-table export and unknown tables."""
    await _ali_with_samsung(client)

    response = await client.get("/api/v1/backup/export/devices")
    assert response.status_code == 200
    assert "RepairDesk_DEVICES_2024-05-15.json" in response.headers["content-disposition"]
    assert response.json()[0]["model"] == "A54"

    response = await client.get("/api/v1/backup/export/invoices")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_backup_status_goes_stale(client: AsyncClient, clock):
    """Test a backup older than the threshold is stale."""
    await client.get("/api/v1/backup/export")

    clock.set(2024, 5, 30, 10, 0)
    response = await client.get("/api/v1/backup/status")

    data = response.json()
    assert data["ageDays"] == 15
    assert data["isStale"] is True
    assert data["staleAfterDays"] == 7
