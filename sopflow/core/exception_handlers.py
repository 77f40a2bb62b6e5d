"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sopflow.core.config import get_settings
from sopflow.domain.exceptions import SopflowException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "UNAUTHORIZED": 403,
    "VALIDATION_ERROR": 400,
    # Template configuration errors (author fixes the template)
    "CYCLIC_DEPENDENCY": 422,
    "DANGLING_DEPENDENCY": 422,
    "UNSUPPORTED_VARIANT": 422,
    "EMPTY_INSTANTIATION": 422,
    "TEMPLATE_INTEGRITY_ERROR": 500,
    # Business-rule rejections
    "INVALID_TRANSITION": 409,
    "DEPENDENCY_NOT_SATISFIED": 409,
    "INCOMPLETE_TASKS": 409,
    "WORKFLOW_NOT_ACTIVE": 409,
    "EVIDENCE_REQUIRED": 409,
    "WORKFLOW_VERSION_CONFLICT": 409,
    "SERVICE_UNAVAILABLE": 503,
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


def _sopflow_exception_handler(
    request: Request, exc: SopflowException
) -> JSONResponse:
    """Return JSON from SopflowException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error(
            "[%s] %s: %s %s",
            _request_id(request),
            exc.error_code,
            exc.message,
            exc.details,
        )
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Return pydantic errors without the non-serializable ctx/input values."""
    return [
        {k: v for k, v in err.items() if k in ("type", "loc", "msg")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("[%s] Unhandled exception: %s", _request_id(request), exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: SopflowException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(SopflowException, _sopflow_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
