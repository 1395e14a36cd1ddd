"""
Referential integrity for the client -> device -> repair chain.

Deletion cascades in explicit filter passes over the snapshot; the chain
is two hops deep, so no general graph traversal is needed. Foreign keys
are never checked on creation.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.models.snapshot import Snapshot


logger = logging.getLogger(__name__)


@dataclass
class Removal:
    """How many records a deletion removed, per collection."""
    clients: int = 0
    devices: int = 0
    repairs: int = 0
    expenses: int = 0

    @property
    def total(self) -> int:
        return self.clients + self.devices + self.repairs + self.expenses


def delete_client(snapshot: Snapshot, client_id: str) -> Removal:
    """
    Remove a client, its devices, and the repairs of those devices.

    Args:
        snapshot: Snapshot to mutate in place
        client_id: Client to remove

    Returns:
        Removal counts
    """
    # Pass 1: devices of the client
    device_ids = {d.id for d in snapshot.devices if d.client_id == client_id}
    devices = [d for d in snapshot.devices if d.client_id != client_id]

    # Pass 2: repairs of those devices
    repairs = [r for r in snapshot.repairs if r.device_id not in device_ids]

    clients = [c for c in snapshot.clients if c.id != client_id]

    removal = Removal(
        clients=len(snapshot.clients) - len(clients),
        devices=len(snapshot.devices) - len(devices),
        repairs=len(snapshot.repairs) - len(repairs),
    )
    snapshot.clients = clients
    snapshot.devices = devices
    snapshot.repairs = repairs

    if removal.total:
        logger.info(
            f"Client {client_id} supprimé: "
            f"{removal.devices} appareil(s), {removal.repairs} réparation(s)"
        )
    return removal


def delete_device(snapshot: Snapshot, device_id: str) -> Removal:
    """Remove a device and its repairs. The owning client is untouched."""
    repairs = [r for r in snapshot.repairs if r.device_id != device_id]
    devices = [d for d in snapshot.devices if d.id != device_id]

    removal = Removal(
        devices=len(snapshot.devices) - len(devices),
        repairs=len(snapshot.repairs) - len(repairs),
    )
    snapshot.repairs = repairs
    snapshot.devices = devices

    if removal.total:
        logger.info(f"Appareil {device_id} supprimé: {removal.repairs} réparation(s)")
    return removal


def owner_name(snapshot: Snapshot, client_id: str) -> Optional[str]:
    """Name of a client, None for an unknown owner."""
    client = next((c for c in snapshot.clients if c.id == client_id), None)
    return client.name if client else None
