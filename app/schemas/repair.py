"""
Repair schemas for request/response validation.
"""

from decimal import Decimal

from pydantic import Field

from app.models.money import NonNegativeAmount
from app.models.repair import ItemList, Repair, RepairStatus
from app.schemas.base import BaseSchema


class RepairBase(BaseSchema):
    """Base repair schema."""

    device_id: str = Field(..., min_length=1)
    problem: str = ""
    parts: ItemList = Field(default_factory=list)
    services: ItemList = Field(default_factory=list)
    cost_parts: NonNegativeAmount = Decimal("0")
    cost_services: NonNegativeAmount = Decimal("0")
    cost_other: NonNegativeAmount = Decimal("0")
    paid_amount: NonNegativeAmount = Decimal("0")
    status: RepairStatus = RepairStatus.PENDING
    technician_notes: str | None = None


class RepairCreate(RepairBase):
    """Schema for creating a repair. The client is taken from the device."""
    pass


class RepairUpdate(BaseSchema):
    """Schema for updating a repair."""

    device_id: str | None = Field(None, min_length=1)
    problem: str | None = None
    parts: ItemList | None = None
    services: ItemList | None = None
    cost_parts: NonNegativeAmount | None = None
    cost_services: NonNegativeAmount | None = None
    cost_other: NonNegativeAmount | None = None
    paid_amount: NonNegativeAmount | None = None
    status: RepairStatus | None = None
    technician_notes: str | None = None


class RepairListResponse(BaseSchema):
    """Paginated repair list response."""

    items: list[Repair]
    total: int
    page: int
    per_page: int
    pages: int
