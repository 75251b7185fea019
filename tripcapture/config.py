"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Trip Capture"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Stockage local / Local storage
    # Fichier SQLite dans le dossier privé de l'app / SQLite file in the app-private data dir
    DATA_DIR: Path = Path("./data")
    DATABASE_FILENAME: str = "trip_capture.db3"
    DATABASE_URL: str | None = None  # surcharge complète / full override
    DATABASE_ECHO: bool = False

    # Géolocalisation / Geolocation
    LOCATION_ENABLED: bool = True
    LOCATION_ACCURACY: str = "medium"
    LOCATION_TIMEOUT_SECONDS: float = 10.0
    LOCATION_MAX_AGE_SECONDS: float = 120.0

    # Connectivité / Connectivity
    CONNECTIVITY_PROBE_URL: str = "https://connectivitycheck.gstatic.com/generate_204"
    CONNECTIVITY_PROBE_TIMEOUT_SECONDS: float = 3.0

    # Affichage historique / History display
    RECORDS_DISPLAY_LIMIT: int = 10

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:8081", "http://localhost:19006"]

    # Rate Limiting
    RATE_LIMIT_GPS: str = "30/minute"
    RATE_LIMIT_DEFAULT: str = "60/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def database_url(self) -> str:
        """URL effective de la base / Effective database URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite+aiosqlite:///{self.DATA_DIR / self.DATABASE_FILENAME}"


settings = Settings()
