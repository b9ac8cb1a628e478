# ============================================================================
# FILE: goonj/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Backend configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Goonj"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./goonj.db"  # Change to PostgreSQL in production

    # Redis cache (empty string disables caching)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_EXPIRE_SECONDS: int = 3600

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Defaults applied to uploaded songs
    DEFAULT_LANGUAGE: str = "Unknown"
    DEFAULT_GENRE: str = "Pop"
    DEFAULT_ERA: str = "2020s"
    DEFAULT_COVER_IMAGE_URL: str = "https://via.placeholder.com/500"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class ClientSettings(BaseSettings):
    """Client configuration (API location, local storage, timers)"""

    API_URL: str = "http://localhost:5000/api"
    STORAGE_PATH: str = "~/.config/goonj/storage.json"
    REQUEST_TIMEOUT: float = 15.0

    # The sleep timer decrements once per tick
    SLEEP_TIMER_TICK_SECONDS: float = 60.0

    class Config:
        env_file = ".env"
        env_prefix = "GOONJ_"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
