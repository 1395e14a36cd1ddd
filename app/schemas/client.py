"""
Client schemas for request/response validation.
"""

from pydantic import Field

from app.models.client import Client
from app.schemas.base import BaseSchema


class ClientBase(BaseSchema):
    """Base client schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., max_length=50)
    address: str | None = None
    notes: str | None = None


class ClientCreate(ClientBase):
    """Schema for creating a new client."""
    pass


class ClientUpdate(BaseSchema):
    """Schema for updating a client."""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    notes: str | None = None


class ClientListResponse(BaseSchema):
    """Paginated client list response."""

    items: list[Client]
    total: int
    page: int
    per_page: int
    pages: int
