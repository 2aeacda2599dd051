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
    Configuration settings for the User Service.

    Loads from a .env file and environment variables.

    All environment variables are prefixed with USER_SERVICE_
    to avoid conflicts with other services.
    """

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- GENERAL APP SETTINGS ---
    PROJECT_NAME: str = "User Service"
    DEBUG: bool = Field(False, alias="USER_SERVICE_DEBUG")
    ENVIRONMENT: Environment = Field(
        Environment.DEVELOPMENT, alias="USER_SERVICE_ENVIRONMENT"
    )
    LOGGING_LEVEL: str = Field("INFO", alias="USER_SERVICE_LOGGING_LEVEL")
    ROOT_PATH: str = Field("/api/v1", alias="USER_SERVICE_ROOT_PATH")

    # --- DATABASE SETTINGS ---
    DATABASE_URL: str = Field(..., alias="USER_SERVICE_DATABASE_URL")

    # --- CORS SETTINGS ---
    CORS_ALLOW_ORIGINS: List[str] = Field(
        ["*"], alias="USER_SERVICE_CORS_ALLOW_ORIGINS"
    )

    # --- JWT & TOKEN SETTINGS ---
    # The secret never leaves this service; other services verify via /auth/authorize.
    JWT_SECRET_KEY: str = Field(..., alias="USER_SERVICE_JWT_SECRET_KEY")
    JWT_ALGORITHM: str = Field("HS256", alias="USER_SERVICE_JWT_ALGORITHM")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        600, alias="USER_SERVICE_JWT_ACCESS_TOKEN_EXPIRE_MINUTES"
    )  # 10 hours

    # --- CROSS-SERVICE SETTINGS ---
    BOOK_SERVICE_URL: str = Field(
        "http://book_service:8000/api/v1", alias="USER_SERVICE_BOOK_SERVICE_URL"
    )
    SERVICE_CALL_TIMEOUT_SECONDS: float = Field(
        5.0, alias="USER_SERVICE_SERVICE_CALL_TIMEOUT_SECONDS"
    )
    # Shared with the book_service; authenticates the favourites cascade.
    INTERNAL_SERVICE_KEY: str = Field(..., alias="USER_SERVICE_INTERNAL_SERVICE_KEY")

    # --- BOOTSTRAP SETTINGS ---
    INITIAL_ADMIN_NAME: str = Field(
        "Super Admin", alias="USER_SERVICE_INITIAL_ADMIN_NAME"
    )
    INITIAL_ADMIN_EMAIL: str = Field(
        "admin@admin.com", alias="USER_SERVICE_INITIAL_ADMIN_EMAIL"
    )
    INITIAL_ADMIN_PASSWORD: str = Field(
        "changeme", alias="USER_SERVICE_INITIAL_ADMIN_PASSWORD"
    )

    # --- PAGINATION ---
    PAGE_SIZE: int = Field(10, alias="USER_SERVICE_PAGE_SIZE")

    # --- RATE LIMITING SETTINGS ---
    RATE_LIMIT_ENABLED: bool = Field(True, alias="USER_SERVICE_RATE_LIMIT_ENABLED")
    RATE_LIMIT_LOGIN: str = Field("5/minute", alias="USER_SERVICE_RATE_LIMIT_LOGIN")
    RATE_LIMIT_REGISTER: str = Field(
        "5/minute", alias="USER_SERVICE_RATE_LIMIT_REGISTER"
    )

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
