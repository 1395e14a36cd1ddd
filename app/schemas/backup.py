"""
Backup and restore schemas.
"""

from datetime import datetime

from app.schemas.base import BaseSchema


class BackupStatus(BaseSchema):
    """Age of the last full backup and whether it is considered stale."""

    last_backup_at: datetime | None
    age_days: float | None
    is_stale: bool
    stale_after_days: int


class ImportResult(BaseSchema):
    """Outcome of a successful full import."""

    message: str
    success: bool = True
    clients: int
    devices: int
    repairs: int
    expenses: int
