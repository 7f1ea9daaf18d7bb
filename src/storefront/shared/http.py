"""HTTP error mapping shared by every router."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from storefront.config import get_settings
from storefront.shared.errors import StorefrontError

logger = structlog.get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and storefront errors onto HTTP responses.

    Protean's own handlers cover ``ValidationError`` (400) and
    ``ObjectNotFoundError`` (404). Storefront errors carry their status
    code; anything else is logged and answered with a 500.
    """
    register_protean_handlers(app)

    @app.exception_handler(StorefrontError)
    async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "request_failed",
                path=request.url.path,
                method=request.method,
                error=exc.message,
                error_type=type(exc).__name__,
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
        )
        content = {"error": "Internal server error"}
        if not get_settings().is_production:
            content["detail"] = str(exc)
        return JSONResponse(status_code=500, content=content)
