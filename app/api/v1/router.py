"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    clients,
    devices,
    repairs,
    expenses,
    catalog,
    backup,
    dashboard,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clients"],
)

api_router.include_router(
    devices.router,
    prefix="/devices",
    tags=["Appareils"],
)

api_router.include_router(
    repairs.router,
    prefix="/repairs",
    tags=["Réparations"],
)

api_router.include_router(
    expenses.router,
    prefix="/expenses",
    tags=["Dépenses"],
)

api_router.include_router(
    catalog.router,
    prefix="/catalog",
    tags=["Catalogue"],
)

api_router.include_router(
    backup.router,
    prefix="/backup",
    tags=["Sauvegardes"],
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)
