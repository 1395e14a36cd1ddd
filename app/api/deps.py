"""
API Dependencies.
The entity store is built once in the application lifespan and handed to
the routes from here.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from app.core.store import EntityStore
from app.services.identification import Classifier


# Logger
logger = logging.getLogger(__name__)


def get_store(request: Request) -> EntityStore:
    """
    Récupère le store de l'application.

    Raises:
        HTTPException: Si le store n'a pas été initialisé
    """
    store = getattr(request.app.state, "store", None)
    if store is None:
        logger.error("Store non initialisé")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Stockage non initialisé",
        )
    return store


def get_classifier(request: Request) -> Classifier:
    """
    Récupère le classifieur d'images installé sur l'application.

    Raises:
        HTTPException: Si aucun classifieur n'est configuré
    """
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service d'identification non configuré",
        )
    return classifier


# Type aliases for cleaner route signatures
Store = Annotated[EntityStore, Depends(get_store)]
DeviceClassifier = Annotated[Classifier, Depends(get_classifier)]
