"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized classification and HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration and access logging
- The database handle (created on startup, disposed on shutdown)

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import Settings, settings
from app.infrastructure.database import Database
from app.interfaces.health import router as health_router
from app.interfaces.subscriptions.router import router as subscriptions_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import RequestLoggingMiddleware, configure_logging
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import build_limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: open the database handle, close it on shutdown.

    uvicorn turns SIGINT/SIGTERM into a lifespan shutdown, so the pool
    is always disposed before the process exits.
    """
    app_settings: Settings = app.state.settings
    database = Database(app_settings.get_database_url(), echo=app_settings.database_echo)
    database.connect()
    try:
        if app_settings.auto_create_schema:
            await database.create_schema()
        await database.ensure_owner(app_settings.demo_user_id, app_settings.demo_user_email)
        app.state.database = database
        logger.info("%s %s started", app_settings.project_name, app_settings.version)
        yield
    finally:
        await database.dispose()
        logger.info("%s stopped", app_settings.project_name)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Args:
        app_settings: Settings to use instead of the environment-loaded ones.

    Returns:
        A fully configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    configure_logging(level=app_settings.log_level)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.version,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(app_settings)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(subscriptions_router, prefix="/api/v1")

    return app


app = create_app()
