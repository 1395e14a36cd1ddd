"""
Device schemas for request/response validation.
"""

from pydantic import Field

from app.models.device import Device
from app.schemas.base import BaseSchema


class DeviceBase(BaseSchema):
    """Base device schema with common fields."""

    client_id: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    imei: str | None = Field(None, max_length=50)
    passcode: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=50)


class DeviceCreate(DeviceBase):
    """Schema for creating a new device."""
    pass


class DeviceDraft(BaseSchema):
    """Unsaved device form, filled in by hand or from an identification."""

    client_id: str | None = None
    brand: str | None = None
    model: str | None = None
    imei: str | None = None
    passcode: str | None = None
    color: str | None = None


class DeviceUpdate(BaseSchema):
    """Schema for updating a device."""

    client_id: str | None = Field(None, min_length=1)
    brand: str | None = Field(None, min_length=1, max_length=100)
    model: str | None = Field(None, min_length=1, max_length=100)
    imei: str | None = Field(None, max_length=50)
    passcode: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=50)


class DeviceListResponse(BaseSchema):
    """Paginated device list response."""

    items: list[Device]
    total: int
    page: int
    per_page: int
    pages: int
