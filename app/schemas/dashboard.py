"""
Dashboard schemas.
"""

from app.models.money import Amount
from app.schemas.backup import BackupStatus
from app.schemas.base import BaseSchema


class DashboardOverview(BaseSchema):
    """Business statistics for the overview screen."""

    client_count: int
    device_count: int
    repair_count: int
    open_repair_count: int
    month_income: Amount
    month_expenses: Amount
    net_profit: Amount
    outstanding_balance: Amount
    repairs_by_status: dict[str, int]
    backup: BackupStatus
