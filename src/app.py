"""Storefront FastAPI application.

Single-domain web server that processes commands synchronously via HTTP.
Every request runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (email handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
import structlog

from storefront.config import get_settings
import storefront.notifications  # noqa: F401  (load before init so traversal doesn't split its import cycle)
from storefront.domain import storefront
from storefront.web import create_app

storefront.init()

logger = structlog.get_logger(__name__)
settings = get_settings()

app = create_app()

logger.info("app_started", environment=settings.environment, storage=settings.image_storage_type)
