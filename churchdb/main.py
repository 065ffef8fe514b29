"""Church Directory API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery); pages router last
    - Global error handlers map ChurchDbError → structured JSON responses
    - Basic auth (optional) is the outermost gate, then CORS, then routes
    - Store Gateway initialized on startup via lifespan; failure is non-fatal
    - Session store and gate created once per app, shared by all requests

Design Decisions:
    - App factory over a bare module-level app: tests build apps with their own
      Settings (basic auth on/off, temp public dir) without env mutation
    - Process-scoped objects on app.state, injected via dependencies (api/deps.py)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from churchdb.api.error_handlers import register_error_handlers
from churchdb.api.middleware import BasicAuthMiddleware
from churchdb.api.routes import auth, directory, health, pages
from churchdb.config import Settings, get_settings
from churchdb.core.session_gate import (
    SessionGate, SessionStore, StaticCredentialProvider,
)
from churchdb.infrastructure.database import init_store
from churchdb.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"DB config in use: {settings.describe_store()}")
    if settings.session_secret == Settings.model_fields["session_secret"].default:
        logger.warning("SESSION_SECRET not set, using the development default")
    app.state.store = await init_store(
        settings.store_url(),
        pool_size=settings.db_connection_limit,
        pool_timeout=settings.db_pool_timeout,
    )
    logger.info(f"Church directory API listening on port {settings.port}")
    yield
    if app.state.store is not None:
        await app.state.store.dispose()
        app.state.store = None
    logger.info("Church directory API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Church Directory API", version="1.0.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.store = None
    app.state.gate = SessionGate(
        SessionStore(settings.session_max_age),
        StaticCredentialProvider(settings.admin_username, settings.admin_password),
    )
    app.state.assets = StaticFiles(directory=settings.public_dir, check_dir=False)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.basic_auth_enabled:
        app.add_middleware(
            BasicAuthMiddleware,
            username=settings.basic_user,
            password=settings.basic_pass,
        )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(directory.router)
    app.include_router(pages.router)

    register_error_handlers(app)
    return app


app = create_app()
