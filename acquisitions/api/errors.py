"""
Exception handlers mapping application errors to HTTP responses.
"""

from typing import Any, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from acquisitions.core.exceptions import AppError, ValidationError
from acquisitions.core.logging import get_logger

logger = get_logger(__name__)

_LOCATION_ROOTS = ("body", "path", "query", "cookie", "header")
_VALUE_ERROR_PREFIX = "Value error, "


def format_validation_errors(errors: Sequence[Any]) -> list[str]:
    """Turn Pydantic error dicts into readable "field: reason" messages."""
    messages = []
    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]

        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS]
        messages.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return messages


def error_response(exc: AppError) -> JSONResponse:
    content: dict[str, Any] = {"error": exc.message}
    if isinstance(exc, ValidationError):
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle every domain error by its declared status."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message} | path={request.url.path}",
        extra={
            "status_code": exc.status_code,
            "actor_id": getattr(request.state, "actor_id", None),
            **exc.context,
        },
    )
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as 400 instead of FastAPI's 422."""
    details = format_validation_errors(exc.errors())
    logger.info(f"Validation error | path={request.url.path}", extra={"details": details})
    return error_response(ValidationError(details=details))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error | path={request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
