"""
Catalog endpoints.
Brand/model reference list used by the device forms.
"""

from fastapi import APIRouter, File, UploadFile

from app.api.deps import Store
from app.models.catalog import CatalogEntry
from app.schemas.catalog import CatalogEntryIn, CatalogResponse
from app.services.catalog import CatalogService


router = APIRouter()


def _response(entries: list[CatalogEntry]) -> CatalogResponse:
    return CatalogResponse(
        entries=entries,
        brand_count=len(entries),
        model_count=sum(len(e.models) for e in entries),
    )


@router.get(
    "",
    response_model=CatalogResponse,
    summary="Catalogue des téléphones",
    description="Obtenir la liste des marques et modèles",
)
async def get_catalog(store: Store) -> CatalogResponse:
    """Get the catalog."""
    service = CatalogService(store)
    return _response(await service.get())


@router.put(
    "",
    response_model=CatalogResponse,
    summary="Remplacer le catalogue",
    description="Remplacer entièrement le catalogue (aucune fusion)",
)
async def replace_catalog(
    entries: list[CatalogEntryIn],
    store: Store,
) -> CatalogResponse:
    """Replace the catalog."""
    service = CatalogService(store)
    catalog = await service.replace(e.model_dump() for e in entries)
    return _response(catalog)


@router.post(
    "/import",
    response_model=CatalogResponse,
    summary="Importer un catalogue",
    description="Remplacer le catalogue depuis un fichier JSON [{brand, models}]",
)
async def import_catalog(
    store: Store,
    file: UploadFile = File(..., description="Fichier JSON du catalogue"),
) -> CatalogResponse:
    """Import a catalog file."""
    service = CatalogService(store)
    catalog = await service.import_payload(await file.read())
    return _response(catalog)
