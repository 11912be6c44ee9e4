"""
Error handling for the API boundary.

Every error leaves the API as ``{"error": "<message>"}``:
- AppError subclasses carry their own status code and extra fields;
- request validation failures become 400s naming the offending field;
- Starlette HTTP errors (unknown route, wrong method) keep their status;
- anything else is logged and answered with a generic 500.
"""
import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from assessment_platform.core.exceptions import AppError, StorageError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler: unhandled exceptions are logged with their traceback
    and turned into a 500 that never leaks internals.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.exception(
                f"Unhandled {type(e).__name__} on {request.method} {request.url.path}"
            )
            return JSONResponse(
                status_code=500,
                content={"error": GENERIC_ERROR_MESSAGE}
            )


async def app_error_handler(request: Request, exc: AppError):
    """Render application errors with their status code."""
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
    elif exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.status_code} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body()
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """Human readable message for the first failing field."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    location = [str(loc) for loc in error.get("loc", ()) if loc not in ("body", "query", "path", "header")]
    field = ".".join(location)
    message = error.get("msg", "is invalid")
    if field:
        return f"{field}: {message}"
    return message


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Request validation errors are answered as 400 with the field name in the message.
    """
    message = describe_validation_error(exc)
    logger.info(f"400 on {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=400,
        content={"error": message}
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None)
    )


def setup_error_middleware(app):
    """
    Add error handling middleware and exception handlers to the FastAPI app.
    """
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
