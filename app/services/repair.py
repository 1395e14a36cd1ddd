"""
Repair service.
Handles repair CRUD and filtering. Totals and completion dates are derived
by the store on every create/update.
"""

import logging
from datetime import date

from fastapi import HTTPException, status

from app.core.integrity import Removal
from app.core.store import EntityStore
from app.models.repair import Repair, RepairStatus
from app.models.snapshot import Collection
from app.schemas.repair import RepairCreate, RepairUpdate


logger = logging.getLogger(__name__)


class RepairService:
    """Service for repair operations."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def _owner_of(self, device_id: str) -> str:
        """Client id of a device, empty for an unknown device."""
        device = await self.store.get(Collection.DEVICES, device_id)
        return device.client_id if device else ""

    async def create(self, data: RepairCreate) -> Repair:
        """
        Create a repair for a device.

        The device owner is copied onto the repair. An unknown device is
        accepted and leaves the owner empty.
        """
        payload = data.model_dump()
        payload["client_id"] = await self._owner_of(data.device_id)

        repair = await self.store.add(Collection.REPAIRS, payload)
        logger.info(f"Réparation créée: {repair.id} (total {repair.total_cost})")
        return repair

    async def get_by_id(self, repair_id: str) -> Repair | None:
        """Get repair by ID."""
        return await self.store.get(Collection.REPAIRS, repair_id)

    async def get_or_404(self, repair_id: str) -> Repair:
        """Get repair by ID or raise 404."""
        repair = await self.get_by_id(repair_id)
        if not repair:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Réparation non trouvée",
            )
        return repair

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
        status: RepairStatus | None = None,
        device_id: str | None = None,
        client_id: str | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> tuple[list[Repair], int]:
        """
        List repairs with filters, newest first.

        Args:
            search: Matches the problem text or the repair id
            status: Only repairs in this status
            device_id: Only repairs of this device
            client_id: Only repairs recorded for this client
            from_date: Entered on or after this day
            to_date: Entered on or before this day

        Returns:
            Tuple of (repairs list, total count)
        """
        snapshot = await self.store.load()
        repairs = snapshot.repairs

        if status:
            repairs = [r for r in repairs if r.status == status]

        if device_id:
            repairs = [r for r in repairs if r.device_id == device_id]

        if client_id:
            repairs = [r for r in repairs if r.client_id == client_id]

        if from_date:
            repairs = [r for r in repairs if r.entry_date.date() >= from_date]

        if to_date:
            repairs = [r for r in repairs if r.entry_date.date() <= to_date]

        if search:
            term = search.lower()
            repairs = [
                r for r in repairs
                if term in r.problem.lower() or term in r.id.lower()
            ]

        repairs = sorted(repairs, key=lambda r: r.entry_date, reverse=True)
        return repairs[skip:skip + limit], len(repairs)

    async def update(self, repair: Repair, data: RepairUpdate) -> Repair:
        """
        Update repair.

        Changing the device refreshes the client copy from the new device.
        """
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("device_id") and update_data["device_id"] != repair.device_id:
            update_data["client_id"] = await self._owner_of(update_data["device_id"])

        await self.store.update(Collection.REPAIRS, repair.id, update_data)
        return await self.get_or_404(repair.id)

    async def delete(self, repair: Repair) -> Removal:
        """Delete a repair."""
        return await self.store.delete(Collection.REPAIRS, repair.id)
