"""
Device record: a phone brought in by a client.
"""

from typing import Optional

from pydantic import Field

from app.models.base import UtcDateTime, utcnow
from app.models.record import Record


class Device(Record):
    """
    Device record.

    Attributes:
        id: Generated identifier
        client_id: Owning client (not validated)
        brand: Manufacturer
        model: Model name
        imei: IMEI / serial number
        passcode: PIN or pattern description
        color: Device color
        created_at: Creation timestamp, never modified
    """

    id: str
    client_id: str = ""
    brand: str = ""
    model: str = ""
    imei: Optional[str] = None
    passcode: Optional[str] = None
    color: Optional[str] = None
    created_at: UtcDateTime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<Device(id='{self.id}', brand='{self.brand}', model='{self.model}')>"
