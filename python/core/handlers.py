"""
Global exception handlers.
Render every AppException (and anything unexpected) as ApiResponse JSON.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import AppException
from core.responses import ApiResponse
from core.logging import get_logger, log_error

logger = get_logger(__name__)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom AppException and subclasses.
    Returns unified ApiResponse format.
    """
    logger.warning(f"AppException: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.from_exception(exc).model_dump()
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Handle request body/query validation failures.
    Keeps the ApiResponse shape instead of FastAPI's default `detail` list.
    """
    fields = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append(".".join(location) or "request")
    message = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request"
    logger.warning(f"Request validation failed on {request.url.path}: {message}")
    return JSONResponse(
        status_code=422,
        content=ApiResponse.fail(
            message=message,
            code="VALIDATION_ERROR",
            meta={"fields": fields}
        ).model_dump()
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.
    Logs full traceback and returns generic error.
    """
    log_error(logger, exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ApiResponse.fail(
            message="Internal server error",
            code="INTERNAL_ERROR"
        ).model_dump()
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the handlers on an application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
