"""
Expense record: an incidental business expense.
No relationship to other records.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from app.models.base import UtcDateTime, utcnow
from app.models.money import NonNegativeAmount, ZERO
from app.models.record import Record


class ExpenseCategory(str, Enum):
    """Expense category enumeration."""
    RENT = "RENT"
    UTILITIES = "UTILITIES"
    SALARY = "SALARY"
    PARTS = "PARTS"
    OTHER = "OTHER"


class Expense(Record):
    """
    Expense record.

    Attributes:
        id: Generated identifier
        title: Short label
        amount: Amount spent
        category: Expense category
        date: When the expense happened
        notes: Free notes
    """

    id: str
    title: str = ""
    amount: NonNegativeAmount = ZERO
    category: ExpenseCategory = ExpenseCategory.OTHER
    date: UtcDateTime = Field(default_factory=utcnow)
    notes: Optional[str] = None

    def __repr__(self) -> str:
        return f"<Expense(id='{self.id}', title='{self.title}', amount={self.amount})>"
