from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ipcountry.logger import logger
from ipcountry.models.response_models import (
    INVALID_REQUEST_BODY,
    UNHANDLED_ERROR,
    error_detail,
)


def _normalize_validation_errors(errors: Any) -> list[dict[str, Any]]:
    """Make sure validation error dicts are safe to log."""
    normalized: list[dict[str, Any]] = []
    for error in errors:
        e = dict(error)
        ctx = e.get("ctx")
        if isinstance(ctx, dict):
            e["ctx"] = {k: str(v) for k, v in ctx.items()}
        e.pop("input", None)
        normalized.append(e)
    return normalized


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors, including router 404/405, as ``{"error": ...}`` bodies.

    Route handlers pass a ready-made error body as ``detail``; plain string
    details (raised by the router itself) are wrapped.
    """
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = error_detail(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body validation errors raised during dependency resolution.

    Validation details are logged but not exposed to clients. Bad IP values are
    rejected by the route handler itself, so every error here is about the body.
    """
    logger.info(
        "Request validation error "
        f"path={request.url.path} method={request.method} errors={_normalize_validation_errors(exc.errors())}"
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_detail(INVALID_REQUEST_BODY))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a generic 500 response."""
    logger.exception(
        f"Unhandled exception while processing request: {repr(exc)} path={request.url.path} method={request.method}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_detail(UNHANDLED_ERROR),
    )
