"""
Client management endpoints.
CRUD operations for clients.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import Store
from app.models.client import Client
from app.models.device import Device
from app.schemas.base import PaginationParams, RemovalResponse
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientListResponse,
)
from app.services.client import ClientService


router = APIRouter()


@router.post(
    "",
    response_model=Client,
    status_code=status.HTTP_201_CREATED,
    summary="Créer un client",
    description="Créer un nouveau client",
)
async def create_client(
    data: ClientCreate,
    store: Store,
) -> Client:
    """Create a new client."""
    service = ClientService(store)
    return await service.create(data)


@router.get(
    "",
    response_model=ClientListResponse,
    summary="Lister les clients",
    description="Obtenir la liste paginée des clients",
)
async def list_clients(
    store: Store,
    page: int = Query(1, ge=1, description="Numéro de page"),
    per_page: int = Query(20, ge=1, le=100, description="Éléments par page"),
    search: str | None = Query(None, description="Rechercher par nom ou téléphone"),
) -> ClientListResponse:
    """List all clients with pagination."""
    service = ClientService(store)
    params = PaginationParams(page=page, per_page=per_page)

    clients, total = await service.list(
        skip=params.offset,
        limit=per_page,
        search=search,
    )

    return ClientListResponse(
        items=clients,
        total=total,
        page=page,
        per_page=per_page,
        pages=PaginationParams.pages_for(total, per_page),
    )


@router.get(
    "/{client_id}",
    response_model=Client,
    summary="Détails d'un client",
    description="Obtenir les détails d'un client",
)
async def get_client(
    client_id: str,
    store: Store,
) -> Client:
    """Get client by ID."""
    service = ClientService(store)
    return await service.get_or_404(client_id)


@router.get(
    "/{client_id}/devices",
    response_model=list[Device],
    summary="Appareils d'un client",
    description="Obtenir les appareils d'un client",
)
async def list_client_devices(
    client_id: str,
    store: Store,
) -> list[Device]:
    """List the devices of a client."""
    service = ClientService(store)
    client = await service.get_or_404(client_id)
    return await service.list_devices(client)


@router.patch(
    "/{client_id}",
    response_model=Client,
    summary="Mettre à jour un client",
    description="Mettre à jour les informations d'un client",
)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    store: Store,
) -> Client:
    """Update a client."""
    service = ClientService(store)
    client = await service.get_or_404(client_id)
    return await service.update(client, data)


@router.delete(
    "/{client_id}",
    response_model=RemovalResponse,
    summary="Supprimer un client",
    description="Supprimer un client avec tous ses appareils et leurs réparations",
)
async def delete_client(
    client_id: str,
    store: Store,
) -> RemovalResponse:
    """Delete a client and everything attached to it."""
    service = ClientService(store)
    client = await service.get_or_404(client_id)
    removal = await service.delete(client)
    return RemovalResponse.from_removal("Client supprimé avec succès", removal)
