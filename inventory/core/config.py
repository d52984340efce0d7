"""
Settings for the catalog service, read from the environment and ``.env``.
"""

from typing import Any, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=True)

    PROJECT_NAME: str = "Inventory Catalog"
    PROJECT_DESCRIPTION: str = "Product catalog, stock tracking and inventory dashboard"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # HTTP
    API_PREFIX: str = "/api"
    CORS_ORIGINS_STR: str = "*"

    # PostgreSQL; DATABASE_URI wins over the individual parts when set
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "inventory"
    DATABASE_URI: Optional[PostgresDsn] = Field(default=None, validate_default=True)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # Catalog rules
    LOW_STOCK_THRESHOLD: int = 10
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Observability
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True
    ENABLE_METRICS: bool = True
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1
    ENABLE_TRACING: bool = False
    TRACING_SAMPLE_RATE: float = 0.1
    OTLP_ENDPOINT: Optional[str] = None

    @field_validator("DATABASE_URI", mode="before")
    @classmethod
    def assemble_database_uri(cls, v: Any, info: ValidationInfo) -> Any:
        if v:
            return v
        parts = info.data
        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=parts["POSTGRES_USER"],
            password=parts["POSTGRES_PASSWORD"],
            host=parts["POSTGRES_SERVER"],
            port=parts["POSTGRES_PORT"],
            path=parts["POSTGRES_DB"],
        )


settings = Settings()
