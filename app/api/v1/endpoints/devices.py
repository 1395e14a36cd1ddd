"""
Device management endpoints.
"""

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from app.api.deps import DeviceClassifier, Store
from app.models.device import Device
from app.models.repair import Repair
from app.schemas.base import PaginationParams, RemovalResponse
from app.schemas.device import (
    DeviceCreate,
    DeviceDraft,
    DeviceUpdate,
    DeviceListResponse,
)
from app.services.catalog import CatalogService
from app.services.device import DeviceService
from app.services.identification import apply_to_draft, identify_device


router = APIRouter()


@router.post(
    "",
    response_model=Device,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un appareil",
    description="Enregistrer un appareil pour un client",
)
async def create_device(
    data: DeviceCreate,
    store: Store,
) -> Device:
    """Create a new device."""
    service = DeviceService(store)
    return await service.create(data)


@router.post(
    "/identify",
    response_model=DeviceDraft,
    summary="Identifier un appareil",
    description="Pré-remplir le formulaire appareil à partir d'une photo (rien n'est enregistré)",
)
async def identify(
    store: Store,
    classifier: DeviceClassifier,
    image: UploadFile = File(..., description="Photo de l'appareil"),
    client_id: str | None = Form(None, alias="clientId"),
    brand: str | None = Form(None),
    model: str | None = Form(None),
    imei: str | None = Form(None),
    passcode: str | None = Form(None),
    color: str | None = Form(None),
) -> DeviceDraft:
    """Identify a device from a photo and fill the draft form."""
    draft = DeviceDraft(
        client_id=client_id,
        brand=brand,
        model=model,
        imei=imei,
        passcode=passcode,
        color=color,
    )
    result = await identify_device(classifier, await image.read())
    catalog = await CatalogService(store).get()
    return apply_to_draft(draft, result, catalog)


@router.get(
    "",
    response_model=DeviceListResponse,
    summary="Lister les appareils",
    description="Obtenir la liste paginée des appareils, les plus récents d'abord",
)
async def list_devices(
    store: Store,
    page: int = Query(1, ge=1, description="Numéro de page"),
    per_page: int = Query(20, ge=1, le=100, description="Éléments par page"),
    search: str | None = Query(None, description="Rechercher par modèle, IMEI ou client"),
    client_id: str | None = Query(None, alias="clientId", description="Filtrer par client"),
) -> DeviceListResponse:
    """List devices with pagination."""
    service = DeviceService(store)
    params = PaginationParams(page=page, per_page=per_page)

    devices, total = await service.list(
        skip=params.offset,
        limit=per_page,
        search=search,
        client_id=client_id,
    )

    return DeviceListResponse(
        items=devices,
        total=total,
        page=page,
        per_page=per_page,
        pages=PaginationParams.pages_for(total, per_page),
    )


@router.get(
    "/{device_id}",
    response_model=Device,
    summary="Détails d'un appareil",
)
async def get_device(
    device_id: str,
    store: Store,
) -> Device:
    """Get device by ID."""
    service = DeviceService(store)
    return await service.get_or_404(device_id)


@router.get(
    "/{device_id}/repairs",
    response_model=list[Repair],
    summary="Historique des réparations",
    description="Réparations d'un appareil, les plus récentes d'abord",
)
async def list_device_repairs(
    device_id: str,
    store: Store,
) -> list[Repair]:
    """List the repairs of a device."""
    service = DeviceService(store)
    device = await service.get_or_404(device_id)
    return await service.list_repairs(device)


@router.patch(
    "/{device_id}",
    response_model=Device,
    summary="Mettre à jour un appareil",
)
async def update_device(
    device_id: str,
    data: DeviceUpdate,
    store: Store,
) -> Device:
    """Update a device."""
    service = DeviceService(store)
    device = await service.get_or_404(device_id)
    return await service.update(device, data)


@router.delete(
    "/{device_id}",
    response_model=RemovalResponse,
    summary="Supprimer un appareil",
    description="Supprimer un appareil et ses réparations",
)
async def delete_device(
    device_id: str,
    store: Store,
) -> RemovalResponse:
    """Delete a device and its repairs."""
    service = DeviceService(store)
    device = await service.get_or_404(device_id)
    removal = await service.delete(device)
    return RemovalResponse.from_removal("Appareil supprimé avec succès", removal)
