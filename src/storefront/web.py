"""Assemble the storefront FastAPI application.

``create_app`` wires middleware, routers, error handlers and the local
upload mount. It expects the domain to be initialised already; ``app.py``
does that once at import for uvicorn.
"""

from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storefront.catalogue.api import category_router, product_router
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.api import admin_router
from storefront.identity.api import router as identity_router
from storefront.ordering.api import cart_router, order_router
from storefront.payments.api import payment_router
from storefront.shared.http import register_exception_handlers
from storefront.shared.rate_limit import RateLimitMiddleware
from storefront.utils.logging import bind_request_context, clear_request_context

API_PREFIX = "/api"

ROUTERS = (
    identity_router,
    admin_router,
    category_router,
    product_router,
    cart_router,
    order_router,
    payment_router,
)


def include_routers(app: FastAPI, prefix: str = API_PREFIX) -> None:
    for router in ROUTERS:
        app.include_router(router, prefix=prefix)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Storefront API",
        description="E-commerce storefront: catalogue, cart, checkout, payments and product images",
    )

    app.add_middleware(RateLimitMiddleware, path_prefix=API_PREFIX)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and bind request log context for each request."""
        bind_request_context(
            request_id=request.headers.get("x-request-id") or uuid4().hex[:12],
            method=request.method,
            path=request.url.path,
        )
        try:
            with storefront.domain_context():
                response = await call_next(request)
        finally:
            clear_request_context()
        return response

    include_routers(app)
    register_exception_handlers(app)

    if settings.image_storage_type == "local":
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
        app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "environment": settings.environment,
                "domain": storefront.name,
            }
        )

    return app
