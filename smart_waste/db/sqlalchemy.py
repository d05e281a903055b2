"""
SQLAlchemy database primitives.

Provides:
- Base: Declarative base for ORM models
- build_engine: engine factory that applies SQLite-specific connect args
- redact_url: connection string with the password masked, for log lines

Engines are never created at import time; WasteStore (db/store.py) owns the
engine and builds it when the application starts.
"""

from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base

# Global ORM base
Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


# PUBLIC_INTERFACE
def redact_url(url: str) -> str:
    """Return the URL with any password replaced by '****'."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable>"


# PUBLIC_INTERFACE
def build_engine(url: str, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    SQLite connections are shared across FastAPI's worker threads, so the
    same-thread check is disabled for them.
    """
    engine_kwargs: Dict[str, Any] = {
        "pool_pre_ping": True,
        "future": True,
        "echo": bool(echo),
    }
    if _is_sqlite(url):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **engine_kwargs)
