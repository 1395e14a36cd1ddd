"""
Client record: a customer of the shop.
A client owns devices by reference (Device.client_id).
"""

from typing import Optional

from pydantic import Field

from app.models.base import UtcDateTime, utcnow
from app.models.record import Record


class Client(Record):
    """
    Client record.

    Attributes:
        id: Generated identifier
        name: Client's full name
        phone: Client's phone number
        address: Client's address
        notes: Free notes
        created_at: Creation timestamp, never modified
    """

    id: str
    name: str = ""
    phone: str = ""
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: UtcDateTime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<Client(id='{self.id}', name='{self.name}')>"
