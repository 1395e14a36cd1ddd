"""
Dashboard Service.
Provides statistics for the overview screen.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from app.core.store import EntityStore
from app.models.money import ZERO
from app.models.repair import RepairStatus
from app.models.snapshot import Snapshot


def _same_month(when: datetime, now: datetime) -> bool:
    return when.year == now.year and when.month == now.month


class DashboardService:
    """Service for dashboard statistics."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def get_overview(self, now: datetime | None = None) -> Dict[str, Any]:
        """
        Get business overview statistics.

        Income counts the total of finished (DONE/DELIVERED) repairs
        entered during the current month.

        Returns:
            Overview with counts, income, expenses and pending amounts
        """
        now = now or self.store.clock()
        snapshot = await self.store.load()

        month_income = sum(
            (
                r.total_cost for r in snapshot.repairs
                if r.status.is_terminal and _same_month(r.entry_date, now)
            ),
            ZERO,
        )
        month_expenses = sum(
            (e.amount for e in snapshot.expenses if _same_month(e.date, now)),
            ZERO,
        )

        return {
            "client_count": len(snapshot.clients),
            "device_count": len(snapshot.devices),
            "repair_count": len(snapshot.repairs),
            "open_repair_count": sum(1 for r in snapshot.repairs if r.status.is_open),
            "month_income": month_income,
            "month_expenses": month_expenses,
            "net_profit": month_income - month_expenses,
            "outstanding_balance": self.outstanding_balance(snapshot),
            "repairs_by_status": self.status_distribution(snapshot),
        }

    @staticmethod
    def outstanding_balance(snapshot: Snapshot) -> Decimal:
        """Unpaid amounts over repairs that are not cancelled."""
        return sum(
            (
                max(r.balance_due, ZERO) for r in snapshot.repairs
                if r.status != RepairStatus.CANCELLED
            ),
            ZERO,
        )

    @staticmethod
    def status_distribution(snapshot: Snapshot) -> Dict[str, int]:
        """Get repair count by status."""
        distribution = {s.value: 0 for s in RepairStatus}
        for repair in snapshot.repairs:
            distribution[repair.status.value] += 1
        return distribution
