"""
Repair management endpoints.
CRUD operations and filtering for repairs.
"""

from datetime import date

from fastapi import APIRouter, Query, status

from app.api.deps import Store
from app.models.repair import Repair, RepairStatus
from app.schemas.base import PaginationParams, RemovalResponse
from app.schemas.repair import (
    RepairCreate,
    RepairUpdate,
    RepairListResponse,
)
from app.services.repair import RepairService


router = APIRouter()


@router.post(
    "",
    response_model=Repair,
    status_code=status.HTTP_201_CREATED,
    summary="Créer une réparation",
    description="Ouvrir une réparation pour un appareil; le total est calculé",
)
async def create_repair(
    data: RepairCreate,
    store: Store,
) -> Repair:
    """Create a new repair."""
    service = RepairService(store)
    return await service.create(data)


@router.get(
    "",
    response_model=RepairListResponse,
    summary="Lister les réparations",
    description="Obtenir la liste paginée et filtrée des réparations",
)
async def list_repairs(
    store: Store,
    page: int = Query(1, ge=1, description="Numéro de page"),
    per_page: int = Query(20, ge=1, le=100, description="Éléments par page"),
    search: str | None = Query(None, description="Rechercher par problème ou numéro"),
    status: RepairStatus | None = Query(None, description="Filtrer par statut"),
    device_id: str | None = Query(None, alias="deviceId", description="Filtrer par appareil"),
    client_id: str | None = Query(None, alias="clientId", description="Filtrer par client"),
    from_date: date | None = Query(None, alias="fromDate", description="Entrées à partir de"),
    to_date: date | None = Query(None, alias="toDate", description="Entrées jusqu'au (inclus)"),
) -> RepairListResponse:
    """List repairs with pagination and filters."""
    service = RepairService(store)
    params = PaginationParams(page=page, per_page=per_page)

    repairs, total = await service.list(
        skip=params.offset,
        limit=per_page,
        search=search,
        status=status,
        device_id=device_id,
        client_id=client_id,
        from_date=from_date,
        to_date=to_date,
    )

    return RepairListResponse(
        items=repairs,
        total=total,
        page=page,
        per_page=per_page,
        pages=PaginationParams.pages_for(total, per_page),
    )


@router.get(
    "/{repair_id}",
    response_model=Repair,
    summary="Détails d'une réparation",
)
async def get_repair(
    repair_id: str,
    store: Store,
) -> Repair:
    """Get repair by ID."""
    service = RepairService(store)
    return await service.get_or_404(repair_id)


@router.patch(
    "/{repair_id}",
    response_model=Repair,
    summary="Mettre à jour une réparation",
    description="Mettre à jour une réparation; total et date de fin sont recalculés",
)
async def update_repair(
    repair_id: str,
    data: RepairUpdate,
    store: Store,
) -> Repair:
    """Update a repair."""
    service = RepairService(store)
    repair = await service.get_or_404(repair_id)
    return await service.update(repair, data)


@router.delete(
    "/{repair_id}",
    response_model=RemovalResponse,
    summary="Supprimer une réparation",
)
async def delete_repair(
    repair_id: str,
    store: Store,
) -> RemovalResponse:
    """Delete a repair."""
    service = RepairService(store)
    repair = await service.get_or_404(repair_id)
    removal = await service.delete(repair)
    return RemovalResponse.from_removal("Réparation supprimée avec succès", removal)
