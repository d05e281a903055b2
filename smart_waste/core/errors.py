"""
Error taxonomy and the JSON error envelope.

Every failure a handler reports is rendered as ``{"error": "<message>"}`` with
the status code of its class:

- ValidationError  -> 400 (missing/invalid field, missing upload)
- UploadError      -> 400 (uploaded file is not an image)
- NotFoundError    -> 404 (no row matches the id)
- PersistenceError -> 500 (a store operation failed)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logger import get_logger

_logger = get_logger(__name__)


# PUBLIC_INTERFACE
class AppError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class ValidationError(AppError):
    status_code = 400


# PUBLIC_INTERFACE
class UploadError(AppError):
    status_code = 400


# PUBLIC_INTERFACE
class NotFoundError(AppError):
    status_code = 404


# PUBLIC_INTERFACE
class PersistenceError(AppError):
    status_code = 500


# PUBLIC_INTERFACE
class ServiceUnavailableError(AppError):
    status_code = 503


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = _logger.error if exc.status_code >= 500 else _logger.info
    log(
        "Request failed",
        extra={"method": request.method, "path": request.url.path, "status": exc.status_code, "error": exc.message},
    )
    return error_response(exc.status_code, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query"))
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = "Invalid request"
    if problems:
        message = f"Invalid request: {'; '.join(problems)}"
    _logger.info("Request validation failed", extra={"path": request.url.path, "error": message})
    return error_response(400, message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    _logger.error("Unhandled error", exc_info=exc, extra={"method": request.method, "path": request.url.path})
    return error_response(500, "Internal server error")


# PUBLIC_INTERFACE
def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers that render every failure as {"error": message}."""
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
