# edumarket/core/config.py
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    MONGO_URL: str
    MONGO_DB_NAME: str = "edumarket"

    # Auth
    JWT_SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    ADMIN_EMAIL_DOMAIN: str = "@admin.com"
    SELLER_EMAIL_DOMAIN: str = "@edu.com"

    # Server
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["*"]

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings()
