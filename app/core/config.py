"""
Configuration de l'application RepairDesk.
Gestion centralisée de toutes les variables d'environnement.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuration principale de l'application.
    Les valeurs sont chargées depuis les variables d'environnement ou le fichier .env
    """

    # Configuration de l'application
    APP_NAME: str = "RepairDesk"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    # Configuration du serveur
    HOST: str = "0.0.0.0"

    # Configuration de la base de données
    DATABASE_URL: str = "sqlite+aiosqlite:///./repairdesk.db"
    DATABASE_URL_SYNC: str = "sqlite:///./repairdesk.db"

    # Stockage du snapshot
    STORE_KEY: str = "repair_shop_v1"
    LAST_BACKUP_KEY: str = "repair_shop_last_backup"
    ID_LENGTH: int = 7

    # Sauvegardes
    BACKUP_STALE_DAYS: int = 7
    EXPORT_FILE_PREFIX: str = "RepairDesk"

    # Configuration CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Logs
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Retourne une instance unique des paramètres.
    Utilise le cache LRU pour éviter de recharger les variables à chaque appel.
    """
    return Settings()


# Instance globale des paramètres
settings = get_settings()
