"""
Uvicorn launcher for the Smart Waste API.

Reads port from Settings (env/.env) and starts the server on 0.0.0.0.
The backend binds to port 3000 by default; set PORT to override.
"""

import os
from contextlib import suppress

import uvicorn  # type: ignore

from smart_waste.core.config import get_settings
from smart_waste.core.logger import get_logger

logger = get_logger(__name__)


def _get_port() -> int:
    """
    Resolve the port to bind:
    - Prefer Settings.PORT (pydantic BaseSettings reads .env/env automatically)
    - Fallback to PORT env var if settings cannot be loaded
    - Default to 3000
    """
    try:
        return int(get_settings().PORT or 3000)
    except Exception:
        with suppress(ValueError):
            return int(os.getenv("PORT", "3000"))
        return 3000


# PUBLIC_INTERFACE
def main() -> None:
    """Start the FastAPI application with uvicorn."""
    port = _get_port()
    logger.info("Starting uvicorn server", extra={"port": port})
    uvicorn.run(
        "smart_waste.api.main:app",
        host="0.0.0.0",
        port=port,
        reload=bool(os.getenv("UVICORN_RELOAD", "").lower() in ("1", "true", "yes")),
        log_level="info",
    )


if __name__ == "__main__":
    main()
