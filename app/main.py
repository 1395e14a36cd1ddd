"""
RepairDesk API - Main Application Entry Point
Registre local pour atelier de réparation de téléphones.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.config import settings
from app.core.database import close_db, create_engine, create_session_factory, init_db
from app.core.errors import RepairDeskError
from app.core.ids import IdGenerator
from app.core.logging import setup_logging
from app.core.store import EntityStore
from app.api.v1.router import api_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the entity store on startup and releases the engine on shutdown.
    """
    # Startup
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info(f"Démarrage de {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environnement: {settings.ENVIRONMENT}")

    engine = create_engine(settings.DATABASE_URL, echo=settings.DEBUG and settings.is_development)

    # Initialize database tables (for development)
    if settings.is_development:
        await init_db(engine)
        logger.info("Tables de la base initialisées")

    app.state.store = EntityStore(
        create_session_factory(engine),
        key=settings.STORE_KEY,
        id_generator=IdGenerator(settings.ID_LENGTH),
    )
    # External photo classifier, installed by the deployment
    app.state.classifier = None

    yield

    # Shutdown
    logger.info("Arrêt en cours...")
    await close_db(engine)
    logger.info("Connexions à la base fermées")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## RepairDesk API

API locale pour la gestion d'un atelier de réparation de téléphones.

### Fonctionnalités principales:

* **Clients** - Fiches clients, recherche par nom ou téléphone
* **Appareils** - Appareils rattachés à un client
* **Réparations** - Suivi du statut, coûts et paiements
* **Dépenses** - Loyer, charges, salaires, pièces
* **Catalogue** - Marques et modèles proposés dans les formulaires
* **Sauvegardes** - Export complet ou par table, restauration

La suppression d'un client supprime ses appareils et leurs réparations.
    """,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with French messages."""
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Erreur de validation des données",
            "errors": errors,
        },
    )


@app.exception_handler(RepairDeskError)
async def repairdesk_exception_handler(request: Request, exc: RepairDeskError):
    """Domain errors answer 400 with their message."""
    logger.warning(f"{request.method} {request.url.path} rejeté: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


# Include API router
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get(
    "/health",
    tags=["Santé"],
    summary="Vérification de l'état du serveur",
)
async def health_check():
    """Check if the API is running."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


# Root endpoint
@app.get(
    "/",
    tags=["Info"],
    summary="Informations de l'API",
)
async def root():
    """Get API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Registre local pour atelier de réparation",
        "docs": "/docs" if settings.is_development else "Disabled in production",
        "health": "/health",
    }


# For running with uvicorn directly
if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", "8000"))

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=port,
        reload=settings.is_development,
    )
