"""Error Handlers — global exception handlers for the admin console API.

Invariants:
    - AdminConsoleError → {success: false, message, error} with the error's status
    - DependencyFailure → 500 with a generic message; full detail logged server side
    - RequestValidationError → 400 with one detail per invalid field
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (AdminConsoleError), validation (Pydantic), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from admin_console.core.errors import AdminConsoleError, DependencyFailure

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AdminConsoleError)
    async def admin_console_error_handler(request: Request, exc: AdminConsoleError):
        """Handle all admin console domain/dependency errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "actor_id": exc.context.actor_id,
        }
        if isinstance(exc, DependencyFailure):
            logger.error(f"{exc.code}: {exc.message}", extra=extra)
        else:
            logger.warning(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "An unexpected error occurred",
                "error": "INTERNAL_ERROR",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body") or "body",
            "message": e["msg"],
        }
        for e in exc.errors()
    ]
    return {
        "success": False,
        "message": "Invalid request data",
        "error": ", ".join(f"{d['field']}: {d['message']}" for d in details),
        "details": details,
    }
