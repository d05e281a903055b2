"""
Application configuration module.

Provides strongly-typed settings using Pydantic BaseSettings. Values are loaded
from environment variables and .env (via python-dotenv automatically loaded by
Pydantic). Use get_settings() to obtain a cached Settings instance.

Storage:
- DATABASE_URL selects the SQLAlchemy database (SQLite file by default).
- UPLOAD_DIR is the directory holding uploaded images; it is created on demand.
- Stored images are served under UPLOAD_URL_PREFIX and advertised to clients
  using PUBLIC_BASE_URL (defaults to http://localhost:<PORT>).
"""

from functools import lru_cache
from typing import Optional, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# PUBLIC_INTERFACE
class Settings(BaseSettings):
    """Centralized application configuration powered by Pydantic BaseSettings."""

    # App
    APP_NAME: str = Field(default="Smart Waste Sorting System", description="Application name")
    APP_ENV: str = Field(default="development", description="Execution environment")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level (DEBUG, INFO, WARNING, ERROR)")
    PORT: int = Field(default=3000, description="Port for the FastAPI server")
    CORS_ALLOWED_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed CORS origins or '*'")

    # Database (SQLAlchemy)
    DATABASE_URL: str = Field(
        default="sqlite:///./waste.db",
        description="SQLAlchemy connection string for the waste database",
    )
    DB_ECHO: bool = Field(default=False, description="If true, SQLAlchemy will echo SQL statements to logs")
    SEED_CATEGORIES: bool = Field(default=True, description="Insert the fixed waste categories at startup if absent")

    # Image storage
    UPLOAD_DIR: str = Field(default="uploads", description="Directory where uploaded images are stored")
    UPLOAD_URL_PREFIX: str = Field(default="/uploads", description="URL path prefix that serves stored images")
    PUBLIC_BASE_URL: Optional[str] = Field(
        default=None,
        description="Base URL used to build image links returned to clients (defaults to http://localhost:<PORT>)",
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Convenience helpers (non-env)
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS_ALLOWED_ORIGINS into a list. '*' returns ['*'] to indicate permissive mode.
        """
        raw = (self.CORS_ALLOWED_ORIGINS or "").strip()
        if raw == "*" or raw == "":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]

    def public_base_url(self) -> str:
        """Return the externally visible base URL without a trailing slash."""
        raw = (self.PUBLIC_BASE_URL or "").strip()
        if not raw:
            return f"http://localhost:{self.PORT}"
        return raw.rstrip("/")

    def upload_url_prefix(self) -> str:
        """Return UPLOAD_URL_PREFIX normalized to '/<segment>' form."""
        prefix = "/" + (self.UPLOAD_URL_PREFIX or "uploads").strip("/")
        return prefix


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
