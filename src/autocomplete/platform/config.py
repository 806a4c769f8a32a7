"""
Autocomplete Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_NAME: str = "autocomplete"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "info"
    VERSION: str = "0.1.0"

    # =========================================================================
    # REDIS (Backing Store)
    # =========================================================================
    REDIS_URL: str = "redis://localhost:6379"
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_SOCKET_TIMEOUT: float = 5.0

    # =========================================================================
    # INDEXING
    # =========================================================================
    AUTOCOMPLETE_KEY_PREFIX: str = "ac"
    AUTOCOMPLETE_INDEX_TYPE: str = "prefixes"
    AUTOCOMPLETE_BATCH_SIZE: int = 1000
    AUTOCOMPLETE_INTERSECTION_TTL: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
