"""
Device service.
Handles device CRUD operations. Owners are not validated: a device whose
client no longer exists is listed with an unknown owner.
"""

import logging
from typing import List

from fastapi import HTTPException, status

from app.core.integrity import Removal, owner_name
from app.core.store import EntityStore
from app.models.device import Device
from app.models.repair import Repair
from app.models.snapshot import Collection
from app.schemas.device import DeviceCreate, DeviceUpdate


logger = logging.getLogger(__name__)


class DeviceService:
    """Service for device operations."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def create(self, data: DeviceCreate) -> Device:
        """Create a new device for a client."""
        device = await self.store.add(Collection.DEVICES, data.model_dump())
        logger.info(f"Appareil créé: {device.id} ({device.brand} {device.model})")
        return device

    async def get_by_id(self, device_id: str) -> Device | None:
        """Get device by ID."""
        return await self.store.get(Collection.DEVICES, device_id)

    async def get_or_404(self, device_id: str) -> Device:
        """Get device by ID or raise 404."""
        device = await self.get_by_id(device_id)
        if not device:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Appareil non trouvé",
            )
        return device

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
        client_id: str | None = None,
    ) -> tuple[list[Device], int]:
        """
        List devices, newest first.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return
            search: Matches model, IMEI or owner name
            client_id: Only devices of this client

        Returns:
            Tuple of (devices list, total count)
        """
        snapshot = await self.store.load()
        devices = snapshot.devices

        if client_id:
            devices = [d for d in devices if d.client_id == client_id]

        if search:
            term = search.lower()
            devices = [
                d for d in devices
                if term in d.model.lower()
                or term in (d.imei or "").lower()
                or term in (owner_name(snapshot, d.client_id) or "").lower()
            ]

        devices = sorted(devices, key=lambda d: d.created_at, reverse=True)
        return devices[skip:skip + limit], len(devices)

    async def list_repairs(self, device: Device) -> List[Repair]:
        """Repairs of a device, newest first."""
        snapshot = await self.store.load()
        repairs = [r for r in snapshot.repairs if r.device_id == device.id]
        return sorted(repairs, key=lambda r: r.entry_date, reverse=True)

    async def update(self, device: Device, data: DeviceUpdate) -> Device:
        """
        Update device.

        Reassigning the device to another client does not touch the
        client copy kept on its existing repairs.
        """
        update_data = data.model_dump(exclude_unset=True)
        await self.store.update(Collection.DEVICES, device.id, update_data)
        return await self.get_or_404(device.id)

    async def delete(self, device: Device) -> Removal:
        """Delete device and its repairs."""
        return await self.store.delete(Collection.DEVICES, device.id)
