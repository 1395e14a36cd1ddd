"""
Expense schemas for request/response validation.
"""

from pydantic import Field

from app.models.base import UtcDateTime
from app.models.expense import Expense, ExpenseCategory
from app.models.money import NonNegativeAmount
from app.schemas.base import BaseSchema


class ExpenseBase(BaseSchema):
    """Base expense schema."""

    title: str = Field(..., min_length=1, max_length=255)
    amount: NonNegativeAmount
    category: ExpenseCategory = ExpenseCategory.OTHER
    date: UtcDateTime | None = None
    notes: str | None = None


class ExpenseCreate(ExpenseBase):
    """Schema for creating an expense. ``date`` defaults to now."""
    pass


class ExpenseUpdate(BaseSchema):
    """Schema for updating an expense."""

    title: str | None = Field(None, min_length=1, max_length=255)
    amount: NonNegativeAmount | None = None
    category: ExpenseCategory | None = None
    date: UtcDateTime | None = None
    notes: str | None = None


class ExpenseListResponse(BaseSchema):
    """Paginated expense list response."""

    items: list[Expense]
    total: int
    page: int
    per_page: int
    pages: int
