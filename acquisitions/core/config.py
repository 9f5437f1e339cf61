"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

from typing import Any, List

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Acquisitions API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Security
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    PASSWORD_HASH_ROUNDS: int = 29000
    SESSION_COOKIE_NAME: str = "token"

    @property
    def is_development(self) -> bool:
        """Local and development environments get non-secure cookies."""
        return self.ENVIRONMENT.lower() in ("development", "local")

    @property
    def session_max_age(self) -> int:
        """Session cookie lifetime in seconds, matching the token expiry."""
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    # Database
    DATABASE_URL: str | None = None  # e.g. sqlite:///./acquisitions.db
    POSTGRES_SERVER: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_DB: str | None = None

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Get database URI - supports both SQLite and PostgreSQL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        if self.POSTGRES_SERVER and self.POSTGRES_USER and self.POSTGRES_PASSWORD and self.POSTGRES_DB:
            return (
                f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        return "sqlite:///./acquisitions.db"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.SQLALCHEMY_DATABASE_URI.startswith("sqlite")

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str] | str:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # First admin (created on startup)
    DISABLE_BOOTSTRAP_USERS: bool = False
    FIRST_SUPERUSER_NAME: str = "Admin User"
    FIRST_SUPERUSER_EMAIL: str = "admin@example.com"
    FIRST_SUPERUSER_PASSWORD: str = "changethis"

    @field_validator("FIRST_SUPERUSER_PASSWORD", mode="after")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Bootstrap password must satisfy the same rules as sign-up."""
        if v and not 6 <= len(v) <= 128:
            raise ValueError("FIRST_SUPERUSER_PASSWORD must be between 6 and 128 characters")
        return v


settings = Settings()  # type: ignore
