"""Exceptions shared by the services and their HTTP mapping.

Protean's own exceptions are mapped by ``register_exception_handlers``
(``ValidationError`` to 400, ``ObjectNotFoundError`` to 404). The handlers
registered here add the remaining business errors and a catch-all 500 that
logs the traceback instead of leaking it to the client.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class ServiceError(Exception):
    """Base class for business errors carrying an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessRuleError(ServiceError):
    """An operation broke a business rule (insufficient stock, forbidden deletion...)."""

    status_code = 400


class DuplicateEntityError(ServiceError):
    """A unique attribute (email, SKU) is already taken."""

    status_code = 409


class AuthenticationError(ServiceError):
    """Credentials were rejected."""

    status_code = 401


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning(
        "Request rejected",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=exc.message,
        status_code=exc.status_code,
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(location) or "request", []).append(error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"error": errors})


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Authentication dependencies, unknown routes and disallowed methods
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error while processing request",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})


def register_error_handlers(app: FastAPI) -> None:
    """Install domain, business and fallback exception handlers on ``app``."""
    register_exception_handlers(app)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
