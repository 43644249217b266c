"""
Error envelope for the admin screens and the ajax endpoint.

Every error leaves the app as

    {"error": {"status_code": 403, "error_code": "AUTH_PERMISSION_DENIED",
               "message": "...", "type": "Forbidden", "path": "/admin/...",
               "details": {"required_permission": "manage_options"}}}

Sources, in the order they are registered:
  - CMSError: login failures (401), missing capabilities (403) and unknown
    posts, terms or users behind an edit screen (404)
  - routing errors raised by Starlette: unknown paths (404), a GET on the
    update endpoint (405)
  - malformed query/path parameters such as a non-numeric tag_ID (422)
  - anything else (500, message hidden)

Rejected meta edits are not errors here: the update endpoint answers
{"success": false, "data": {...}} with status 200 so the inline editor can
show per-field messages.
"""

import logging
from http import HTTPStatus
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.exceptions import CMSError, ErrorCode

logger = logging.getLogger(__name__)

# Error codes for errors Starlette raises while routing
ROUTING_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: ErrorCode.RESOURCE_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.METHOD_NOT_ALLOWED,
}


def error_response(
    request: Request,
    status_code: int,
    error_code: ErrorCode,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    """Build the error envelope for one failed request."""
    error: dict[str, Any] = {
        "status_code": status_code,
        "error_code": error_code.value,
        "message": message,
        "type": HTTPStatus(status_code).phrase,
        "path": request.url.path,
    }
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


async def cms_exception_handler(request: Request, exc: CMSError) -> JSONResponse:
    logger.warning(
        f"{exc.error_code.value}: {exc.message}",
        extra={"status_code": exc.status_code, "error_code": exc.error_code.value, "path": request.url.path},
    )
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def routing_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error_code = ROUTING_ERROR_CODES.get(exc.status_code, ErrorCode.UNKNOWN_ERROR)
    return error_response(request, exc.status_code, error_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report each bad parameter by name, e.g. {"field": "tag_ID", ...}."""
    errors = [
        {"field": ".".join(str(loc) for loc in error["loc"][1:]), "message": error["msg"]}
        for error in exc.errors()
    ]
    logger.warning(f"Invalid parameters on {request.url.path}: {[e['field'] for e in errors]}")
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorCode.VALIDATION_FAILED,
        "Validation error",
        {"validation_errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorCode.INTERNAL_ERROR,
        "An unexpected error occurred. Please try again later.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CMSError, cms_exception_handler)
    app.add_exception_handler(StarletteHTTPException, routing_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
