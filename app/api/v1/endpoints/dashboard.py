"""
Dashboard endpoints.
Business statistics for the overview screen.
"""

from fastapi import APIRouter

from app.api.deps import Store
from app.api.v1.endpoints.backup import build_backup_status
from app.schemas.dashboard import DashboardOverview
from app.services.backup import BackupService
from app.services.dashboard import DashboardService


router = APIRouter()


@router.get(
    "",
    response_model=DashboardOverview,
    summary="Vue d'ensemble",
    description="Statistiques générales et état des sauvegardes",
)
async def get_overview(store: Store) -> DashboardOverview:
    """Obtenir la vue d'ensemble."""
    now = store.clock()
    overview = await DashboardService(store).get_overview(now)
    last_backup_at = await BackupService(store).last_backup_at()
    return DashboardOverview(
        **overview,
        backup=build_backup_status(last_backup_at, now),
    )
