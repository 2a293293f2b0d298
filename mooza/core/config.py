"""
Configuration management for the Mooza search service.

Settings are read from environment variables and an optional ``.env`` file:
- Database connection (full URL or individual PostgreSQL parts)
- JWT verification for caller sessions
- Search pagination limits and cache lifetimes
"""

from functools import lru_cache
from typing import List, Literal, Optional

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)

KNOWN_ENVIRONMENTS = ("local", "development", "staging", "production", "test")


class Settings(BaseSettings):
    """Service settings. Only SECRET_KEY has no default."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Runtime
    ENVIRONMENT: str = Field("local", description="local, development, staging, production or test")
    DEBUG: bool = False
    APP_NAME: str = "Mooza Search"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = Field("*", description="'*' or a comma-separated origin list")
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    # Caller sessions
    SECRET_KEY: str = Field(..., description="HMAC key shared with the token issuer")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Store
    DATABASE_URL: Optional[str] = Field(None, description="Async SQLAlchemy URL; wins over POSTGRES_*")
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "mooza"
    POSTGRES_PASSWORD: str = "mooza"
    POSTGRES_DB: str = "mooza"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_STATEMENT_TIMEOUT_SECONDS: int = Field(10, description="Applied to every search query")
    DB_CREATE_TABLES: bool = Field(False, description="create_all on startup instead of alembic")
    SEED_REFERENCE_DATA: bool = Field(False, description="Upsert the reference catalog on startup")

    # Search
    SEARCH_DEFAULT_PAGE_SIZE: int = Field(20, description="Used when a request omits limit")
    SEARCH_MAX_PAGE_SIZE: int = 100
    SEARCH_RESULT_CACHE_TTL: int = Field(0, description="Seconds; 0 turns result caching off")
    CATALOG_CACHE_TTL: int = Field(3600, description="Seconds a loaded catalog stays cached")
    CACHE_MAX_SIZE: int = 10000

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        if len(v) < 32:
            raise ValueError("SECRET_KEY needs at least 32 characters")
        return v

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in KNOWN_ENVIRONMENTS:
            logger.warning("Unknown environment, falling back to local", environment=v)
            return "local"
        return name

    @field_validator("SEARCH_DEFAULT_PAGE_SIZE", "SEARCH_MAX_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("page sizes must be positive")
        return v

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def is_local(self) -> bool:
        return self.ENVIRONMENT in ("local", "test")

    def get_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        """
        Get the async SQLAlchemy database URL.

        Plain ``postgresql://`` and ``postgres://`` URLs are switched to the
        asyncpg driver.
        """
        url = self.DATABASE_URL or (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )
        for prefix in ("postgresql://", "postgres://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix):]
        return url


@lru_cache()
def get_settings() -> Settings:
    """Process-wide settings, validated once."""
    current = Settings()
    logger.info(
        "Configuration ready",
        environment=current.ENVIRONMENT,
        result_cache_enabled=current.SEARCH_RESULT_CACHE_TTL > 0,
        catalog_cache_ttl=current.CATALOG_CACHE_TTL,
    )
    return current
