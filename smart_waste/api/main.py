from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from ..core.config import Settings, get_settings
from ..core.errors import register_exception_handlers
from ..core.logger import get_logger
from ..db.store import WasteStore
from ..routers.categories import router as categories_router
from ..routers.classify import router as classify_router
from ..routers.health import router as health_router
from ..routers.waste_items import router as waste_items_router
from ..services.blob_store import BlobStore
from ..services.classifier import Classifier, RandomClassifier

logger = get_logger(__name__)

_INDEX_HTML = """
<h1>{app_name}</h1>
<p>API is running. Use these endpoints:</p>
<ul>
  <li>GET <a href="/api/health">/api/health</a></li>
  <li>GET <a href="/api/health/db">/api/health/db</a></li>
  <li>POST /api/classify (upload image)</li>
  <li>GET <a href="/api/waste-items">/api/waste-items</a></li>
  <li>GET | PUT | DELETE /api/waste-items/{{id}}</li>
  <li>GET <a href="/api/categories">/api/categories</a> | POST /api/categories</li>
  <li>PUT | DELETE /api/categories/{{id}}</li>
  <li>GET {uploads}/{{filename}} (stored images)</li>
</ul>
"""


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Open the store (schema + seed data) at startup and close it at shutdown."""
    settings: Settings = app.state.settings
    store: WasteStore = app.state.store
    store.open()
    store.create_schema()
    if settings.SEED_CATEGORIES:
        store.seed_categories()
    app.state.blob_store.ensure_dir()
    logger.info("Startup complete.", extra={"port": settings.PORT})
    try:
        yield
    finally:
        store.close()
        logger.info("Shutdown complete.")


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    store: Optional[WasteStore] = None,
    classifier: Optional[Classifier] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration; defaults to the cached environment settings.
        store: Persistent store; defaults to one built from settings.DATABASE_URL.
        classifier: Image classifier; defaults to RandomClassifier.

    Returns:
        The configured FastAPI app. The store is opened by the app lifespan.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="REST API that stores uploaded waste photos and their classifications.",
        version="1.0.0",
        lifespan=_lifespan,
        openapi_tags=[
            {"name": "Health", "description": "Service health and diagnostics"},
            {"name": "Classification", "description": "Upload and classify waste images"},
            {"name": "Waste Items", "description": "Stored classification records"},
            {"name": "Categories", "description": "Waste categories and recycling guidance"},
        ],
    )
    app.state.settings = settings
    app.state.store = store or WasteStore(settings.DATABASE_URL, echo=settings.DB_ECHO)
    app.state.blob_store = BlobStore(settings.UPLOAD_DIR)
    app.state.classifier = classifier or RandomClassifier()

    # CORS configuration driven by settings
    origins = settings.cors_origins_list()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Incoming request", extra={"method": request.method, "path": request.url.path})
        return await call_next(request)

    register_exception_handlers(app)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index() -> HTMLResponse:
        """Human-readable list of endpoints."""
        return HTMLResponse(_INDEX_HTML.format(app_name=settings.APP_NAME, uploads=settings.upload_url_prefix()))

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        return Response(status_code=204)

    app.include_router(health_router)
    app.include_router(classify_router)
    app.include_router(waste_items_router)
    app.include_router(categories_router)

    # The directory may not exist until the first upload.
    app.mount(
        settings.upload_url_prefix(),
        StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    logger.info("FastAPI app initialized", extra={"app_name": settings.APP_NAME, "env": settings.APP_ENV})
    return app


app = create_app()


if __name__ == "__main__":
    # Allow running as: python -m smart_waste.api.main
    import uvicorn  # type: ignore

    uvicorn.run("smart_waste.api.main:app", host="0.0.0.0", port=get_settings().PORT, log_level="info")
