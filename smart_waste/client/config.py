"""
Capture client configuration.

Values come from WASTE_CLIENT_* environment variables or .env, e.g.
WASTE_CLIENT_API_BASE_URL=http://192.168.1.102:3000
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# PUBLIC_INTERFACE
class ClientSettings(BaseSettings):
    """Settings for the capture client."""

    API_BASE_URL: str = Field(default="http://localhost:3000", description="Base URL of the Smart Waste API")
    TIMEOUT: float = Field(default=30.0, description="HTTP timeout in seconds")
    JPEG_QUALITY: int = Field(default=70, ge=1, le=95, description="JPEG quality used when recompressing photos")
    MAX_DIMENSION: int = Field(default=1280, ge=16, description="Longest side, in pixels, of an uploaded image")

    model_config = SettingsConfigDict(
        env_prefix="WASTE_CLIENT_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    """Return a cached ClientSettings instance."""
    return ClientSettings()
