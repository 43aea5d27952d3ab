import os
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API settings
    API_V1_STR: str = "/v1"
    PROJECT_NAME: str = "InTouch API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", alias="ENVIRONMENT")
    DEBUG: bool = Field(default=False, alias="DEBUG")

    # Security
    SECRET_KEY: str = Field(default="intouch-secret-key-for-development", alias="SECRET_KEY")
    ALGORITHM: str = Field(default="HS256", alias="ALGORITHM")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=7 * 24 * 60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./intouch.db", alias="DATABASE_URL")

    # CORS
    @property
    def CORS_ORIGINS(self) -> List[str]:
        if self.ENVIRONMENT == "development":
            return [
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "*"  # Allow all origins in development
            ]
        cors_origins = os.getenv("CORS_ORIGINS", "*")
        return [origin.strip() for origin in cors_origins.split(",") if origin.strip()] or ["*"]

    # Translations
    DEFAULT_LANGUAGE: str = Field(default="lt", alias="DEFAULT_LANGUAGE")
    FALLBACK_LANGUAGE: str = Field(default="en", alias="FALLBACK_LANGUAGE")

    # Transactional e-mail provider
    EMAIL_API_KEY: str = Field(default="", alias="EMAIL_API_KEY")
    EMAIL_API_BASE_URL: str = Field(default="https://api.emailservice.com/v1", alias="EMAIL_API_BASE_URL")
    EMAIL_FROM: str = Field(default="noreply@intouch.lt", alias="EMAIL_FROM")
    EMAIL_TIMEOUT_SECONDS: float = Field(default=10.0, alias="EMAIL_TIMEOUT_SECONDS")

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = Field(default=60, alias="RATE_LIMIT_PER_MINUTE")

    # Caching
    CACHE_TTL_SECONDS: int = Field(default=300, alias="CACHE_TTL_SECONDS")  # 5 minutes

    # Logging
    LOG_LEVEL: str = Field(default="INFO", alias="LOG_LEVEL")
    LOG_FILE: str = Field(default="logs/app.log", alias="LOG_FILE")

    # Demo data
    SEED_DEMO_DATA: bool = Field(default=True, alias="SEED_DEMO_DATA")
    DEMO_PASSWORD: str = Field(default="password123", alias="DEMO_PASSWORD")

    # Specialist search
    SEARCH_PAGE_SIZE: int = Field(default=6, alias="SEARCH_PAGE_SIZE")
    SUGGESTION_LIMIT: int = Field(default=5, alias="SUGGESTION_LIMIT")
    SUGGESTION_MIN_LENGTH: int = Field(default=2, alias="SUGGESTION_MIN_LENGTH")


def get_settings() -> Settings:
    """Get the global settings instance."""
    if not hasattr(get_settings, "_instance"):
        get_settings._instance = Settings()
    return get_settings._instance


settings = get_settings()
