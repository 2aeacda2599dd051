# book-service/src/book_service/config.py
from enum import Enum
from typing import List

from pydantic import Field, PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Configuration settings for the Book Service.

    All environment variables are prefixed with BOOK_SERVICE_
    to avoid conflicts with other services.
    """

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- GENERAL APP SETTINGS ---
    PROJECT_NAME: str = "Book Service"
    DEBUG: bool = Field(False, alias="BOOK_SERVICE_DEBUG")
    ENVIRONMENT: Environment = Field(
        Environment.DEVELOPMENT, alias="BOOK_SERVICE_ENVIRONMENT"
    )
    LOGGING_LEVEL: str = Field("INFO", alias="BOOK_SERVICE_LOGGING_LEVEL")
    ROOT_PATH: str = Field("/api/v1", alias="BOOK_SERVICE_ROOT_PATH")

    # --- DATABASE SETTINGS ---
    DATABASE_URL: str = Field(..., alias="BOOK_SERVICE_DATABASE_URL")

    # --- CORS SETTINGS ---
    CORS_ALLOW_ORIGINS: List[str] = Field(["*"], alias="BOOK_SERVICE_CORS_ALLOW_ORIGINS")

    # --- CROSS-SERVICE SETTINGS ---
    # Identity is resolved by the user_service; this service holds no signing secret.
    USER_SERVICE_URL: str = Field(
        "http://user_service:8000/api/v1", alias="BOOK_SERVICE_USER_SERVICE_URL"
    )
    SERVICE_CALL_TIMEOUT_SECONDS: float = Field(
        5.0, alias="BOOK_SERVICE_SERVICE_CALL_TIMEOUT_SECONDS"
    )
    # Must match USER_SERVICE_INTERNAL_SERVICE_KEY.
    INTERNAL_SERVICE_KEY: str = Field(..., alias="BOOK_SERVICE_INTERNAL_SERVICE_KEY")

    # --- CASCADE DELIVERY ---
    CASCADE_MAX_ATTEMPTS: int = Field(8, alias="BOOK_SERVICE_CASCADE_MAX_ATTEMPTS")
    CASCADE_RETRY_BASE_SECONDS: float = Field(
        2.0, alias="BOOK_SERVICE_CASCADE_RETRY_BASE_SECONDS"
    )
    CASCADE_RETRY_MAX_SECONDS: float = Field(
        300.0, alias="BOOK_SERVICE_CASCADE_RETRY_MAX_SECONDS"
    )
    # 0 disables the periodic sweep.
    CASCADE_SWEEP_INTERVAL_SECONDS: float = Field(
        30.0, alias="BOOK_SERVICE_CASCADE_SWEEP_INTERVAL_SECONDS"
    )

    # --- PAGINATION ---
    PAGE_SIZE: int = Field(10, alias="BOOK_SERVICE_PAGE_SIZE")

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        return self.ENVIRONMENT == Environment.TESTING

    @field_validator("DATABASE_URL", mode="after")
    def validate_db_url(cls, v: PostgresDsn) -> str:
        """Ensures the database URL uses the psycopg driver."""
        return str(v).replace("postgresql://", "postgresql+psycopg://")


# Global instance of the settings
settings = Settings()
