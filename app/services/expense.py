"""
Expense service.
"""

import logging
from datetime import date

from fastapi import HTTPException, status

from app.core.integrity import Removal
from app.core.store import EntityStore
from app.models.expense import Expense, ExpenseCategory
from app.models.snapshot import Collection
from app.schemas.expense import ExpenseCreate, ExpenseUpdate


logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense operations."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def create(self, data: ExpenseCreate) -> Expense:
        """Record an expense. Without a date it is dated now."""
        expense = await self.store.add(Collection.EXPENSES, data.model_dump())
        logger.info(f"Dépense enregistrée: {expense.id} ({expense.amount})")
        return expense

    async def get_or_404(self, expense_id: str) -> Expense:
        """Get expense by ID or raise 404."""
        expense = await self.store.get(Collection.EXPENSES, expense_id)
        if not expense:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Dépense non trouvée",
            )
        return expense

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        category: ExpenseCategory | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> tuple[list[Expense], int]:
        """List expenses with filters, newest first."""
        snapshot = await self.store.load()
        expenses = snapshot.expenses

        if category:
            expenses = [e for e in expenses if e.category == category]

        if from_date:
            expenses = [e for e in expenses if e.date.date() >= from_date]

        if to_date:
            expenses = [e for e in expenses if e.date.date() <= to_date]

        expenses = sorted(expenses, key=lambda e: e.date, reverse=True)
        return expenses[skip:skip + limit], len(expenses)

    async def update(self, expense: Expense, data: ExpenseUpdate) -> Expense:
        """Update expense."""
        update_data = data.model_dump(exclude_unset=True)
        await self.store.update(Collection.EXPENSES, expense.id, update_data)
        return await self.get_or_404(expense.id)

    async def delete(self, expense: Expense) -> Removal:
        """Delete an expense."""
        return await self.store.delete(Collection.EXPENSES, expense.id)
