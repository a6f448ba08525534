from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Courtside API"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (empty means the relational store is not configured)
    DATABASE_URL: str = ""

    # Active data source: 'local', 'remote' or 'offline'
    DATA_SOURCE: str = "local"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Rate limiting for the HTTP surface
    RATE_LIMIT: str = "120/minute"

    # Local store seeding
    SEED_SAMPLE_DATA: bool = True
    SAMPLE_PLAYER_COUNT: int = 14

    # Model
    MODEL_VERSION: str = "v1"

    @property
    def remote_configured(self) -> bool:
        """True when a relational backend URL has been supplied."""
        return bool(self.DATABASE_URL.strip())

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
