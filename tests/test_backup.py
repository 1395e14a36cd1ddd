"""
Backup and restore tests.
"""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.errors import SnapshotImportError, UnknownTableError
from app.core.store import EntityStore
from app.models.repair import RepairStatus
from app.models.snapshot import Collection
from app.services.backup import BackupService


async def _seed(store: EntityStore) -> None:
    client = await store.add(Collection.CLIENTS, {"name": "Ali", "phone": "0550"})
    device = await store.add(
        Collection.DEVICES,
        {"clientId": client.id, "brand": "Samsung", "model": "Galaxy A54"},
    )
    await store.add(
        Collection.REPAIRS,
        {"deviceId": device.id, "clientId": client.id, "costParts": 100, "costServices": 50},
    )
    await store.add(Collection.EXPENSES, {"title": "Loyer", "amount": "300", "category": "RENT"})


@pytest.mark.asyncio
async def test_export_then_import_restores_equal_snapshot(store: EntityStore):
    """Test a full backup restores to the same snapshot."""
    await _seed(store)
    service = BackupService(store)
    before = await store.load()

    export = await service.export_full()
    await store.delete(Collection.CLIENTS, before.clients[0].id)
    restored = await service.import_full(export.to_bytes())

    assert restored == before
    assert await store.load() == before


@pytest.mark.asyncio
async def test_export_full_filename_and_marker(store: EntityStore, clock):
    """Test full export naming and last backup tracking."""
    service = BackupService(store)
    assert await service.last_backup_at() is None

    export = await service.export_full()

    assert export.filename == "RepairDesk_Full_Backup_2024-05-15.json"
    assert set(export.content) == {"clients", "devices", "repairs", "expenses", "catalog"}
    assert await service.last_backup_at() == clock.now

    clock.set(2024, 5, 25, 10, 0)
    assert await service.last_backup_age() == timedelta(days=10)


@pytest.mark.asyncio
async def test_export_table(store: EntityStore):
    """Test a single collection exports as a bare list."""
    await _seed(store)
    service = BackupService(store)

    export = await service.export_table("repairs")

    assert export.filename == "RepairDesk_REPAIRS_2024-05-15.json"
    assert isinstance(export.content, list)
    assert export.content[0]["totalCost"] == 150
    # Table exports do not count as a full backup
    assert await service.last_backup_at() is None


@pytest.mark.asyncio
async def test_export_unknown_table(store: EntityStore):
    """Test exporting a collection that does not exist."""
    service = BackupService(store)

    with pytest.raises(UnknownTableError):
        await service.export_table("invoices")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        b"{not json",
        b'[{"id": "C1"}]',
        b'{"foo": []}',
        b'{"devices": [], "repairs": []}',
        b'{"clients": {}, "devices": []}',
        b'{"clients": [{"name": "no id"}]}',
        b'{"clients": [], "repairs": [{"id": "R1", "deviceId": "D1", "costParts": -5}]}',
    ],
)
async def test_rejected_import_leaves_snapshot_untouched(store: EntityStore, content):
    """Test rejected files never replace the stored snapshot."""
    await _seed(store)
    service = BackupService(store)
    before = await store.get_marker(store.key)

    with pytest.raises(SnapshotImportError):
        await service.import_full(content)

    assert await store.get_marker(store.key) == before
    assert await service.last_backup_at() is None


@pytest.mark.asyncio
async def test_import_legacy_backup(store: EntityStore):
    """Test backups from the previous shop software load."""
    legacy = {
        "clients": [{"id": "C1", "name": "Ali", "phone": "0550", "createdAt": "2023-01-10T09:00:00.000Z"}],
        "devices": [{"id": "D1", "clientId": "C1", "brand": "Samsung", "model": "A54"}],
        "repairs": [
            {
                "id": "R1",
                "deviceId": "D1",
                "clientId": "C1",
                "problem": "Écran cassé",
                "parts": "Écran, Vitre",
                "costParts": "120",
                "costServices": 30,
                "totalCost": 150,
                "paidAmount": "100",
                "status": "تم التسليم",
                "entryDate": "2023-01-10T09:05:00.000Z",
                "completionDate": "2023-01-12T17:00:00.000Z",
            }
        ],
    }
    service = BackupService(store)

    snapshot = await service.import_full(json.dumps(legacy, ensure_ascii=False))

    repair = snapshot.repairs[0]
    assert repair.status is RepairStatus.DELIVERED
    assert repair.parts == ["Écran", "Vitre"]
    assert repair.balance_due == Decimal("50")
    assert repair.entry_date == datetime(2023, 1, 10, 9, 5, tzinfo=timezone.utc)
    # Missing collections and catalog fall back to defaults
    assert snapshot.expenses == []
    assert snapshot.catalog


@pytest.mark.asyncio
async def test_last_backup_marker_formats(store: EntityStore):
    """Test epoch milliseconds, naive ISO and garbage markers."""
    service = BackupService(store)

    await store.set_marker(service.marker_key, "1715767200000")
    assert await service.last_backup_at() == datetime(2024, 5, 15, 10, 0, tzinfo=timezone.utc)

    await store.set_marker(service.marker_key, "2024-05-15T10:00:00")
    assert await service.last_backup_at() == datetime(2024, 5, 15, 10, 0, tzinfo=timezone.utc)

    await store.set_marker(service.marker_key, "hier")
    assert await service.last_backup_at() is None
