from fastapi import APIRouter, Depends

from ..core.errors import PersistenceError, ServiceUnavailableError
from ..core.logger import get_logger
from ..db.store import WasteStore
from ..api.deps import get_store
from ..models.schemas import ErrorResponse, HealthResponse

router = APIRouter(prefix="/api/health", tags=["Health"])

_logger = get_logger(__name__)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=HealthResponse,
    summary="Service health",
    description="Liveness endpoint. Always returns 200 when the app is up; no database access.",
    responses={200: {"description": "Service is healthy"}},
)
def get_health() -> HealthResponse:
    return HealthResponse(status="OK", message="Server is running")


# PUBLIC_INTERFACE
@router.get(
    "/db",
    response_model=HealthResponse,
    summary="Database connectivity",
    description="Runs a simple SELECT 1 through the store to confirm the database is reachable.",
    responses={
        200: {"description": "Database reachable"},
        503: {"model": ErrorResponse, "description": "Database unavailable"},
    },
)
def health_db(store: WasteStore = Depends(get_store)) -> HealthResponse:
    """
    Database connectivity health check.

    Returns 200 with {"status": "OK"} on success, or 503 {"error": ...} when the
    store is closed or the query fails.
    """
    try:
        store.ping()
    except PersistenceError as exc:
        _logger.error("DB connectivity failed", extra={"error": exc.message})
        raise ServiceUnavailableError(f"Database unavailable: {exc.message}") from exc
    return HealthResponse(status="OK", message="Database reachable")
