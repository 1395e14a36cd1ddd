"""
Expense endpoints.
"""

from datetime import date

from fastapi import APIRouter, Query, status

from app.api.deps import Store
from app.models.expense import Expense, ExpenseCategory
from app.schemas.base import PaginationParams, RemovalResponse
from app.schemas.expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseListResponse,
)
from app.services.expense import ExpenseService


router = APIRouter()


@router.post(
    "",
    response_model=Expense,
    status_code=status.HTTP_201_CREATED,
    summary="Enregistrer une dépense",
)
async def create_expense(
    data: ExpenseCreate,
    store: Store,
) -> Expense:
    """Record an expense."""
    service = ExpenseService(store)
    return await service.create(data)


@router.get(
    "",
    response_model=ExpenseListResponse,
    summary="Lister les dépenses",
)
async def list_expenses(
    store: Store,
    page: int = Query(1, ge=1, description="Numéro de page"),
    per_page: int = Query(20, ge=1, le=100, description="Éléments par page"),
    category: ExpenseCategory | None = Query(None, description="Filtrer par catégorie"),
    from_date: date | None = Query(None, alias="fromDate", description="À partir de"),
    to_date: date | None = Query(None, alias="toDate", description="Jusqu'au (inclus)"),
) -> ExpenseListResponse:
    """List expenses with pagination and filters."""
    service = ExpenseService(store)
    params = PaginationParams(page=page, per_page=per_page)

    expenses, total = await service.list(
        skip=params.offset,
        limit=per_page,
        category=category,
        from_date=from_date,
        to_date=to_date,
    )

    return ExpenseListResponse(
        items=expenses,
        total=total,
        page=page,
        per_page=per_page,
        pages=PaginationParams.pages_for(total, per_page),
    )


@router.get(
    "/{expense_id}",
    response_model=Expense,
    summary="Détails d'une dépense",
)
async def get_expense(
    expense_id: str,
    store: Store,
) -> Expense:
    """Get expense by ID."""
    service = ExpenseService(store)
    return await service.get_or_404(expense_id)


@router.patch(
    "/{expense_id}",
    response_model=Expense,
    summary="Mettre à jour une dépense",
)
async def update_expense(
    expense_id: str,
    data: ExpenseUpdate,
    store: Store,
) -> Expense:
    """Update an expense."""
    service = ExpenseService(store)
    expense = await service.get_or_404(expense_id)
    return await service.update(expense, data)


@router.delete(
    "/{expense_id}",
    response_model=RemovalResponse,
    summary="Supprimer une dépense",
)
async def delete_expense(
    expense_id: str,
    store: Store,
) -> RemovalResponse:
    """Delete an expense."""
    service = ExpenseService(store)
    expense = await service.get_or_404(expense_id)
    removal = await service.delete(expense)
    return RemovalResponse.from_removal("Dépense supprimée avec succès", removal)
