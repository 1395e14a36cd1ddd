"""
Models module.
The SQLAlchemy row backing the persistence medium and the snapshot records
are exported from here for easy imports.
"""

from app.models.store_entry import StoreEntry
from app.models.client import Client
from app.models.device import Device
from app.models.repair import Repair, RepairStatus
from app.models.expense import Expense, ExpenseCategory
from app.models.catalog import CatalogEntry, default_catalog
from app.models.snapshot import Collection, Snapshot


__all__ = [
    "StoreEntry",
    "Client",
    "Device",
    "Repair",
    "RepairStatus",
    "Expense",
    "ExpenseCategory",
    "CatalogEntry",
    "default_catalog",
    "Collection",
    "Snapshot",
]
