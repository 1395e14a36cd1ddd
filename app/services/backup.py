"""
Backup Service.
Exports the whole snapshot or one collection as a JSON file, restores a
full backup, and tracks when the last full backup was taken.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import SnapshotImportError, UnknownTableError
from app.core.store import EntityStore
from app.models.snapshot import Collection, Snapshot


logger = logging.getLogger(__name__)


# A full backup exposes at least one of these
PRIMARY_KEYS = ("clients", "devices", "repairs")


@dataclass
class ExportFile:
    """JSON export ready to be downloaded."""
    filename: str
    content: Any

    def to_bytes(self) -> bytes:
        return json.dumps(self.content, ensure_ascii=False, indent=2).encode("utf-8")


class BackupService:
    """Service for backup and restore operations."""

    def __init__(
        self,
        store: EntityStore,
        marker_key: str | None = None,
        file_prefix: str | None = None,
    ):
        self.store = store
        self.marker_key = marker_key or settings.LAST_BACKUP_KEY
        self.file_prefix = file_prefix or settings.EXPORT_FILE_PREFIX

    def _filename(self, label: str, now: datetime) -> str:
        return f"{self.file_prefix}_{label}_{now.date().isoformat()}.json"

    async def _mark_backup(self, now: datetime) -> None:
        await self.store.set_marker(self.marker_key, now.isoformat())

    async def export_full(self, now: datetime | None = None) -> ExportFile:
        """
        Export the whole snapshot and record ``now`` as the last backup time.

        Returns:
            ExportFile named ``<prefix>_Full_Backup_<YYYY-MM-DD>.json``
        """
        now = now or self.store.clock()
        snapshot = await self.store.load()
        export = ExportFile(
            filename=self._filename("Full_Backup", now),
            content=snapshot.to_json_dict(),
        )
        await self._mark_backup(now)
        logger.info(f"Sauvegarde complète exportée: {export.filename}")
        return export

    async def export_table(self, name: str, now: datetime | None = None) -> ExportFile:
        """
        Export one collection as a bare list. References are not resolved.

        Raises:
            UnknownTableError: If ``name`` is not a collection
        """
        try:
            collection = Collection(name)
        except ValueError:
            raise UnknownTableError(f"Table inconnue: {name}")

        now = now or self.store.clock()
        snapshot = await self.store.load()
        return ExportFile(
            filename=self._filename(collection.value.upper(), now),
            content=[record.to_json_dict() for record in snapshot.records(collection)],
        )

    async def import_full(self, raw: bytes | str, now: datetime | None = None) -> Snapshot:
        """
        Restore a full backup, replacing the current snapshot wholesale.

        Args:
            raw: File content
            now: Recorded as the last backup time on success

        Returns:
            The restored snapshot

        Raises:
            SnapshotImportError: If the file is rejected; the stored
                snapshot is left untouched
        """
        try:
            data = json.loads(raw)
        except ValueError:
            raise SnapshotImportError("Fichier illisible: le contenu n'est pas du JSON valide")

        if isinstance(data, list):
            raise SnapshotImportError(
                "Format de fichier non supporté. Utilisez un fichier de sauvegarde complet."
            )

        if not isinstance(data, dict) or not any(key in data for key in PRIMARY_KEYS):
            raise SnapshotImportError(
                "Format de fichier invalide: aucune des collections clients, devices, repairs"
            )

        if not isinstance(data.get("clients"), list):
            raise SnapshotImportError(
                "Sauvegarde incomplète: la collection 'clients' est absente ou n'est pas une liste"
            )

        try:
            snapshot = Snapshot.model_validate(data)
        except ValidationError as exc:
            raise SnapshotImportError(
                f"Sauvegarde invalide: {exc.error_count()} enregistrement(s) illisible(s)"
            )

        await self.store.save(snapshot)
        await self._mark_backup(now or self.store.clock())
        logger.info(
            f"Sauvegarde restaurée: {len(snapshot.clients)} client(s), "
            f"{len(snapshot.devices)} appareil(s), {len(snapshot.repairs)} réparation(s)"
        )
        return snapshot

    async def last_backup_at(self) -> datetime | None:
        """When the last full backup (or restore) happened, None if never."""
        value = await self.store.get_marker(self.marker_key)
        if not value:
            return None
        try:
            if value.isdigit():
                # Epoch milliseconds, as written by the previous shop software
                return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
            when = datetime.fromisoformat(value)
        except ValueError:
            logger.warning(f"Date de dernière sauvegarde illisible: {value!r}")
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return when

    async def last_backup_age(self, now: datetime | None = None) -> timedelta | None:
        """Time elapsed since the last full backup, None if never."""
        last = await self.last_backup_at()
        if last is None:
            return None
        return (now or self.store.clock()) - last
