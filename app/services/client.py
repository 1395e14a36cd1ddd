"""
Client service.
Handles client CRUD operations on top of the entity store.
"""

import logging
from typing import List

from fastapi import HTTPException, status

from app.core.integrity import Removal
from app.core.store import EntityStore
from app.models.client import Client
from app.models.device import Device
from app.models.snapshot import Collection
from app.schemas.client import ClientCreate, ClientUpdate


logger = logging.getLogger(__name__)


class ClientService:
    """Service for client operations."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def create(self, data: ClientCreate) -> Client:
        """
        Create a new client.

        Args:
            data: Client data

        Returns:
            Created client
        """
        client = await self.store.add(Collection.CLIENTS, data.model_dump())
        logger.info(f"Client créé: {client.id}")
        return client

    async def get_by_id(self, client_id: str) -> Client | None:
        """Get client by ID."""
        return await self.store.get(Collection.CLIENTS, client_id)

    async def get_or_404(self, client_id: str) -> Client:
        """
        Get client by ID or raise 404.

        Raises:
            HTTPException: If client not found
        """
        client = await self.get_by_id(client_id)
        if not client:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Client non trouvé",
            )
        return client

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
    ) -> tuple[list[Client], int]:
        """
        List clients with pagination and search.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return
            search: Search term for name/phone

        Returns:
            Tuple of (clients list, total count)
        """
        snapshot = await self.store.load()
        clients = snapshot.clients

        if search:
            term = search.lower()
            clients = [
                c for c in clients
                if term in c.name.lower() or term in c.phone.lower()
            ]

        clients = sorted(clients, key=lambda c: c.name.lower())
        return clients[skip:skip + limit], len(clients)

    async def list_devices(self, client: Client) -> List[Device]:
        """Devices owned by a client, newest first."""
        snapshot = await self.store.load()
        devices = [d for d in snapshot.devices if d.client_id == client.id]
        return sorted(devices, key=lambda d: d.created_at, reverse=True)

    async def update(self, client: Client, data: ClientUpdate) -> Client:
        """
        Update client.

        Device ownership is not re-validated.
        """
        update_data = data.model_dump(exclude_unset=True)
        await self.store.update(Collection.CLIENTS, client.id, update_data)
        return await self.get_or_404(client.id)

    async def delete(self, client: Client) -> Removal:
        """
        Delete client with its devices and their repairs.

        Returns:
            Removal counts
        """
        return await self.store.delete(Collection.CLIENTS, client.id)
