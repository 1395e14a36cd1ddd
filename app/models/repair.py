"""
Repair record and its status enumeration.
Supports pending, in-progress, done, delivering, delivered and cancelled statuses.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BeforeValidator, Field, field_validator

from app.models.base import UtcDateTime, utcnow
from app.models.money import NonNegativeAmount, ZERO
from app.models.record import Record


class RepairStatus(str, Enum):
    """Repair status enumeration."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def _missing_(cls, value: object) -> Optional["RepairStatus"]:
        # Labels written by the previous shop software
        if isinstance(value, str):
            return _LEGACY_LABELS.get(value.strip())
        return None

    @property
    def is_terminal(self) -> bool:
        """Work considered finished (DONE or DELIVERED)."""
        return _TERMINAL[self]

    @property
    def is_open(self) -> bool:
        """Work not started or in progress."""
        return _OPEN[self]


_TERMINAL = {
    RepairStatus.PENDING: False,
    RepairStatus.IN_PROGRESS: False,
    RepairStatus.DONE: True,
    RepairStatus.DELIVERING: False,
    RepairStatus.DELIVERED: True,
    RepairStatus.CANCELLED: False,
}

_OPEN = {
    RepairStatus.PENDING: True,
    RepairStatus.IN_PROGRESS: True,
    RepairStatus.DONE: False,
    RepairStatus.DELIVERING: False,
    RepairStatus.DELIVERED: False,
    RepairStatus.CANCELLED: False,
}

_LEGACY_LABELS = {
    "قيد الانتظار": RepairStatus.PENDING,
    "جاري العمل": RepairStatus.IN_PROGRESS,
    "تم الإصلاح": RepairStatus.DONE,
    "جاري التسليم": RepairStatus.DELIVERING,
    "تم التسليم": RepairStatus.DELIVERED,
    "ملغي": RepairStatus.CANCELLED,
}


def split_items(value: Any) -> Any:
    """Accept "screen, battery" as well as ["screen", "battery"]."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


ItemList = Annotated[List[str], BeforeValidator(split_items)]


class Repair(Record):
    """
    Repair order against a device.

    Attributes:
        id: Generated identifier
        device_id: Repaired device
        client_id: Copy of the device owner captured at create/update time
        problem: Reported problem
        parts: Parts used, in order
        services: Services performed, in order
        cost_parts: Cost of parts
        cost_services: Cost of services
        cost_other: Other costs
        total_cost: Sum of the three costs (derived)
        paid_amount: Amount already paid
        status: Current status
        technician_notes: Internal notes
        entry_date: Intake timestamp, never modified
        completion_date: Set when the repair reaches DONE/DELIVERED
    """

    id: str
    device_id: str = ""
    client_id: str = ""
    problem: str = ""
    parts: ItemList = Field(default_factory=list)
    services: ItemList = Field(default_factory=list)
    cost_parts: NonNegativeAmount = ZERO
    cost_services: NonNegativeAmount = ZERO
    cost_other: NonNegativeAmount = ZERO
    total_cost: NonNegativeAmount = ZERO
    paid_amount: NonNegativeAmount = ZERO
    status: RepairStatus = RepairStatus.PENDING
    technician_notes: Optional[str] = None
    entry_date: UtcDateTime = Field(default_factory=utcnow)
    completion_date: Optional[UtcDateTime] = None

    @field_validator("status", mode="before")
    @classmethod
    def _legacy_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return RepairStatus(value)
        return value

    @property
    def balance_due(self) -> Decimal:
        """Calculate remaining balance."""
        return self.total_cost - self.paid_amount

    def __repr__(self) -> str:
        return f"<Repair(id='{self.id}', status={self.status.value}, total={self.total_cost})>"
