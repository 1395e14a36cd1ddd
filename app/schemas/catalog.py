"""
Catalog schemas.
"""

from pydantic import Field

from app.models.catalog import CatalogEntry
from app.schemas.base import BaseSchema


class CatalogEntryIn(BaseSchema):
    """Brand and its models, as sent by the settings screen."""

    brand: str = Field(..., min_length=1, max_length=100)
    models: list[str] = Field(default_factory=list)


class CatalogResponse(BaseSchema):
    """Current catalog."""

    entries: list[CatalogEntry]
    brand_count: int
    model_count: int
