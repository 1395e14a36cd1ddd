"""
Financial derivation for repairs.
Keeps totalCost equal to the sum of its cost components and stamps
completionDate on status transitions.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from app.models.money import to_amount
from app.models.repair import Repair, RepairStatus


def compute_total(cost_parts: Any, cost_services: Any, cost_other: Any) -> Decimal:
    """Sum of the three cost components, non-numeric inputs counted as zero."""
    return to_amount(cost_parts) + to_amount(cost_services) + to_amount(cost_other)


def completion_date_for(
    previous: RepairStatus,
    incoming: Optional[RepairStatus],
    current: Optional[datetime],
    now: datetime,
) -> Optional[datetime]:
    """
    New completionDate after a status update.

    Args:
        previous: Status before the update
        incoming: Status carried by the update, None if the update has none
        current: completionDate before the update
        now: Time of the update

    Returns:
        ``now`` when entering DONE/DELIVERED from any other status,
        ``current`` when moving within DONE/DELIVERED or staying outside,
        None when leaving DONE/DELIVERED.
    """
    if incoming is None:
        return current
    if incoming.is_terminal:
        return current if previous.is_terminal else now
    if previous.is_terminal:
        return None
    return current


def prepare_new_repair(repair: Repair, now: datetime) -> Repair:
    """Stamp entryDate, derive totalCost, clear completionDate."""
    repair.entry_date = now
    repair.completion_date = None
    repair.total_cost = compute_total(repair.cost_parts, repair.cost_services, repair.cost_other)
    return repair


def apply_repair_update(previous: Repair, changes: dict, now: datetime) -> Repair:
    """
    Merge ``changes`` over ``previous`` and re-derive the financial fields.

    ``changes`` uses field names; immutable and derived fields must already
    have been removed by the caller.
    """
    updated = Repair.model_validate({**previous.model_dump(), **changes})
    updated.total_cost = compute_total(updated.cost_parts, updated.cost_services, updated.cost_other)
    incoming = updated.status if "status" in changes else None
    updated.completion_date = completion_date_for(
        previous.status,
        incoming,
        previous.completion_date,
        now,
    )
    return updated
