"""
Pydantic schemas for request/response validation.
"""

from app.schemas.base import (
    MessageResponse,
    PaginationParams,
    RemovalResponse,
)
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientListResponse,
)
from app.schemas.device import (
    DeviceCreate,
    DeviceDraft,
    DeviceUpdate,
    DeviceListResponse,
)
from app.schemas.repair import (
    RepairCreate,
    RepairUpdate,
    RepairListResponse,
)
from app.schemas.expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseListResponse,
)
from app.schemas.catalog import (
    CatalogEntryIn,
    CatalogResponse,
)
from app.schemas.backup import (
    BackupStatus,
    ImportResult,
)
from app.schemas.dashboard import DashboardOverview

__all__ = [
    # Common
    "MessageResponse",
    "PaginationParams",
    "RemovalResponse",
    # Client
    "ClientCreate",
    "ClientUpdate",
    "ClientListResponse",
    # Device
    "DeviceCreate",
    "DeviceDraft",
    "DeviceUpdate",
    "DeviceListResponse",
    # Repair
    "RepairCreate",
    "RepairUpdate",
    "RepairListResponse",
    # Expense
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseListResponse",
    # Catalog
    "CatalogEntryIn",
    "CatalogResponse",
    # Backup
    "BackupStatus",
    "ImportResult",
    # Dashboard
    "DashboardOverview",
]
