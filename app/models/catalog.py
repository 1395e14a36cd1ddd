"""
Catalog entry: a phone brand and its models, used to populate forms.
"""

from typing import List

from pydantic import Field

from app.models.record import Record


class CatalogEntry(Record):
    """Brand and its models, in display order."""

    brand: str
    models: List[str] = Field(default_factory=list)


DEFAULT_CATALOG = (
    ("Apple", ("iPhone 15 Pro Max", "iPhone 15", "iPhone 14 Pro", "iPhone 13", "iPhone 12", "iPhone 11", "iPhone X/XS")),
    ("Samsung", ("Galaxy S24 Ultra", "Galaxy S23", "Galaxy A54", "Galaxy A34", "Galaxy A14", "Note 20 Ultra")),
    ("Xiaomi", ("Redmi Note 13", "POCO X6", "Xiaomi 14", "Redmi 12")),
    ("Oppo", ("Reno 10", "A78", "A58")),
    ("Realme", ("11 Pro", "C55", "C53")),
)


def default_catalog() -> List[CatalogEntry]:
    """Built-in seed catalog (fresh copies on every call)."""
    return [CatalogEntry(brand=brand, models=list(models)) for brand, models in DEFAULT_CATALOG]


def match_brand(catalog: List[CatalogEntry], name: str) -> str:
    """Catalog spelling of a brand (case-insensitive), ``name`` itself if unknown."""
    wanted = name.strip().lower()
    for entry in catalog:
        if entry.brand.lower() == wanted:
            return entry.brand
    return name
