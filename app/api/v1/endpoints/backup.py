"""
Backup endpoints.
Full and per-table exports, full restore, and backup staleness.
"""

from datetime import datetime, timedelta

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import Response

from app.api.deps import Store
from app.core.config import settings
from app.schemas.backup import BackupStatus, ImportResult
from app.services.backup import BackupService, ExportFile


router = APIRouter()


def _download(export: ExportFile) -> Response:
    return Response(
        content=export.to_bytes(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


def build_backup_status(last_backup_at: datetime | None, now: datetime) -> BackupStatus:
    """
    Stale when never backed up or older than BACKUP_STALE_DAYS.
    """
    stale_after = timedelta(days=settings.BACKUP_STALE_DAYS)
    if last_backup_at is None:
        return BackupStatus(
            last_backup_at=None,
            age_days=None,
            is_stale=True,
            stale_after_days=settings.BACKUP_STALE_DAYS,
        )
    age = now - last_backup_at
    return BackupStatus(
        last_backup_at=last_backup_at,
        age_days=round(age.total_seconds() / 86400, 2),
        is_stale=age > stale_after,
        stale_after_days=settings.BACKUP_STALE_DAYS,
    )


@router.get(
    "/export",
    summary="Sauvegarde complète",
    description="Télécharger toutes les données (clients, appareils, réparations, dépenses, catalogue)",
)
async def export_full(store: Store) -> Response:
    """Download a full backup."""
    service = BackupService(store)
    return _download(await service.export_full())


@router.get(
    "/export/{table}",
    summary="Exporter une table",
    description="Télécharger une seule table: clients, devices, repairs ou expenses",
)
async def export_table(table: str, store: Store) -> Response:
    """Download one collection."""
    service = BackupService(store)
    return _download(await service.export_table(table))


@router.post(
    "/import",
    response_model=ImportResult,
    summary="Restaurer une sauvegarde",
    description="Remplacer toutes les données par le contenu d'une sauvegarde complète",
)
async def import_full(
    store: Store,
    file: UploadFile = File(..., description="Fichier de sauvegarde complet"),
) -> ImportResult:
    """Restore a full backup."""
    service = BackupService(store)
    snapshot = await service.import_full(await file.read())
    return ImportResult(
        message="Données restaurées avec succès",
        clients=len(snapshot.clients),
        devices=len(snapshot.devices),
        repairs=len(snapshot.repairs),
        expenses=len(snapshot.expenses),
    )


@router.get(
    "/status",
    response_model=BackupStatus,
    summary="État des sauvegardes",
    description="Date de la dernière sauvegarde et alerte si elle est trop ancienne",
)
async def backup_status(store: Store) -> BackupStatus:
    """Get the last backup date and staleness."""
    service = BackupService(store)
    return build_backup_status(await service.last_backup_at(), store.clock())
