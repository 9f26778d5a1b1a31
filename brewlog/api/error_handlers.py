"""Error Handlers — global exception handlers for the BrewLog API.

Invariants:
    - BrewLogError → structured JSON with error code, message, severity
    - RequestValidationError caused by a symbolic decode → 400 INVALID_ENUM_VALUE
      with the offending value and the valid names
    - Other RequestValidationError → 400 VALIDATION_ERROR with field-level details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (BrewLogError), validation (Pydantic), catch-all (Exception)
    - Decode failures recognised through the exception Pydantic keeps in ctx["error"]
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from brewlog.core.errors import BrewLogError, EnumDecodeError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_brewlog_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_brewlog_error_handler(app: FastAPI) -> None:
    """Register BrewLog domain/infrastructure error handler."""

    @app.exception_handler(BrewLogError)
    async def brewlog_error_handler(request: Request, exc: BrewLogError):
        """Handle all BrewLog domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"BrewLogError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "resource": exc.context.resource,
                "resource_id": exc.context.resource_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        content = _build_validation_error_response(exc)
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": content["error"]["code"], "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=content,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

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
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _decode_error(error: dict) -> EnumDecodeError | None:
    cause = (error.get("ctx") or {}).get("error")
    return cause if isinstance(cause, EnumDecodeError) else None


def _field_name(error: dict) -> str:
    return ".".join(str(loc) for loc in error["loc"])


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    details = []
    first_decode_error = None
    for e in exc.errors():
        decode_error = _decode_error(e)
        if decode_error is not None:
            first_decode_error = first_decode_error or decode_error
            details.append(decode_error.to_detail(_field_name(e)))
        else:
            details.append({
                "field": _field_name(e),
                "message": e["msg"],
                "type": e["type"],
            })

    if first_decode_error is not None:
        code, message = "INVALID_ENUM_VALUE", first_decode_error.message
    else:
        code, message = "VALIDATION_ERROR", "Invalid request data"
    return {
        "error": {
            "code": code,
            "message": message,
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": details,
        },
    }
