"""
Catalog service.
Reads and replaces the brand -> models reference list used by the forms.
"""

import json
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from app.core.errors import CatalogImportError
from app.core.store import EntityStore
from app.models.catalog import CatalogEntry


logger = logging.getLogger(__name__)


class CatalogService:
    """Service for catalog operations."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def get(self) -> list[CatalogEntry]:
        """Current catalog (seed list for snapshots that predate it)."""
        snapshot = await self.store.load()
        return snapshot.catalog

    async def replace(self, entries: Iterable[CatalogEntry | dict]) -> list[CatalogEntry]:
        """
        Replace the catalog wholesale.

        No merge with the previous catalog and no deduplication across brands.
        """
        catalog = [CatalogEntry.model_validate(e) for e in entries]
        snapshot = await self.store.load()
        snapshot.catalog = catalog
        await self.store.save(snapshot)
        logger.info(f"Catalogue remplacé: {len(catalog)} marque(s)")
        return catalog

    async def import_payload(self, payload: Any) -> list[CatalogEntry]:
        """
        Validate an imported catalog file and replace the catalog with it.

        Args:
            payload: Parsed JSON, or raw bytes/str to parse

        Raises:
            CatalogImportError: Unparsable content, not a non-empty list,
                first element without a brand, or malformed entries
        """
        if isinstance(payload, (bytes, str)):
            try:
                payload = json.loads(payload)
            except ValueError:
                raise CatalogImportError("Fichier catalogue illisible (JSON invalide)")

        if not isinstance(payload, list) or not payload:
            raise CatalogImportError("Le catalogue doit être une liste non vide de marques")

        first = payload[0]
        if not isinstance(first, dict) or not first.get("brand"):
            raise CatalogImportError("Format de catalogue invalide: champ 'brand' manquant")

        try:
            entries = [CatalogEntry.model_validate(e) for e in payload]
        except ValidationError as exc:
            raise CatalogImportError(f"Entrées de catalogue invalides ({exc.error_count()} erreur(s))")

        return await self.replace(entries)
