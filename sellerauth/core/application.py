"""Application factory for creating and configuring the FastAPI application."""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from sellerauth.adapters.api import api_router
from sellerauth.adapters.api.health import router as health_router
from sellerauth.core.config.settings import settings
from sellerauth.core.handlers import register_exception_handlers
from sellerauth.core.lifecycle import create_lifespan_manager
from sellerauth.core.middleware import configure_middleware
from sellerauth.core.ratelimiter import limiter
from sellerauth.infrastructure.dependency_injection import ServiceContainer


def create_application(container: Optional[ServiceContainer] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        container: Pre-built services. When given it is attached immediately,
            so the app can serve requests even where the lifespan never runs
            (e.g. ``httpx.ASGITransport``). Otherwise the lifespan builds one
            from settings.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="User accounts, sessions and Amazon seller account linking.",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )

    app.state.limiter = limiter
    if container is not None:
        app.state.container = container

    configure_middleware(app)
    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(health_router, prefix="/health", tags=["health"])

    return app
