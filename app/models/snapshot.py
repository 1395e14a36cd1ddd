"""
Snapshot: every collection plus the catalog, persisted and backed up as one unit.
"""

from enum import Enum
from typing import Any, List, Tuple, Type

from pydantic import Field, ValidationError, field_validator

from app.models.catalog import CatalogEntry, default_catalog
from app.models.client import Client
from app.models.device import Device
from app.models.expense import Expense
from app.models.record import Record
from app.models.repair import Repair


class Collection(str, Enum):
    """Record collections of the snapshot."""
    CLIENTS = "clients"
    DEVICES = "devices"
    REPAIRS = "repairs"
    EXPENSES = "expenses"

    @property
    def record_type(self) -> Type[Record]:
        return RECORD_TYPES[self]


RECORD_TYPES = {
    Collection.CLIENTS: Client,
    Collection.DEVICES: Device,
    Collection.REPAIRS: Repair,
    Collection.EXPENSES: Expense,
}


class Snapshot(Record):
    """
    Complete state of the ledger at one point in time.

    Attributes:
        clients: Client records
        devices: Device records
        repairs: Repair records
        expenses: Expense records
        catalog: Brand/models reference list
    """

    clients: List[Client] = Field(default_factory=list)
    devices: List[Device] = Field(default_factory=list)
    repairs: List[Repair] = Field(default_factory=list)
    expenses: List[Expense] = Field(default_factory=list)
    catalog: List[CatalogEntry] = Field(default_factory=default_catalog)

    @field_validator("clients", "devices", "repairs", "expenses", mode="before")
    @classmethod
    def _null_collection(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("catalog", mode="before")
    @classmethod
    def _null_catalog(cls, value: Any) -> Any:
        # Snapshots written before the catalog existed
        return default_catalog() if value is None else value

    @classmethod
    def fresh(cls) -> "Snapshot":
        """Empty collections with the seed catalog."""
        return cls()

    @classmethod
    def salvage(cls, data: dict) -> Tuple["Snapshot", List[str]]:
        """
        Build a snapshot from every record of ``data`` that validates.

        Returns:
            The snapshot, and one description per dropped record or list
        """
        rejected = []
        values = {}
        parts = [(c.value, c.record_type) for c in Collection] + [("catalog", CatalogEntry)]
        for name, record_type in parts:
            items = data.get(name)
            if items is None:
                continue
            if not isinstance(items, list):
                rejected.append(f"{name}: liste attendue")
                continue
            kept = []
            for index, item in enumerate(items):
                try:
                    kept.append(record_type.model_validate(item))
                except ValidationError as exc:
                    rejected.append(f"{name}[{index}]: {exc.error_count()} erreur(s)")
            values[name] = kept
        return cls(**values), rejected

    def records(self, collection: Collection) -> list:
        """The list backing a collection (mutations are visible on the snapshot)."""
        return getattr(self, Collection(collection).value)

    def set_records(self, collection: Collection, records: list) -> None:
        setattr(self, Collection(collection).value, records)

    def find(self, collection: Collection, record_id: str) -> Record | None:
        return next((r for r in self.records(collection) if r.id == record_id), None)

    def ids(self, collection: Collection) -> set[str]:
        return {r.id for r in self.records(collection)}
