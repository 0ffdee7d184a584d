# ============================================================================
# FILE: songly/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Songly"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = ""
    HOST: str = "127.0.0.1"
    PORT: int = 3001

    # Database
    DATABASE_URL: str = "sqlite:///./songly.db"  # Change to PostgreSQL in production

    # Security
    SECRET_KEY: str = "songly-dev-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BCRYPT_WORK_FACTOR: int = 12

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:4200", "http://localhost:3001"]

    # SoundCloud
    SOUNDCLOUD_BASE_URL: str = "https://api.soundcloud.com"
    SOUNDCLOUD_CLIENT_ID: str = ""
    SOUNDCLOUD_CLIENT_SECRET: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
