"""FastAPI application factory for the catalog REST service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from typing import Dict
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .controller import register_exception_handlers
from .database import create_engine_and_session
from .database import initialise_schema
from .database import resolve_database_url
from .facade.base import SessionFactory
from .logging_config import configure_logging
from .providers import TimeProvider
from .providers import system_time
from .routes import catalog_routers
from .settings import CatalogSettings
from .settings import get_settings


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[CatalogSettings] = None,
    *,
    session_factory: Optional[SessionFactory] = None,
    time_provider: TimeProvider = system_time,
) -> FastAPI:
    """Build the catalog application.

    Args:
        settings (Optional[CatalogSettings]): Configuration; loaded from the
            environment when omitted.
        session_factory (Optional[SessionFactory]): Session factory used by
            the facades. When omitted, the lifespan opens the configured
            database and creates missing tables.
        time_provider (TimeProvider): Clock used for audit stamps and year
            validation.

    Returns:
        FastAPI: The configured application.
    """

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = None
        if app.state.session_factory is None:
            url = resolve_database_url(settings.database_url)
            engine, app.state.session_factory = create_engine_and_session(url)
            await initialise_schema(engine)
            logger.info("Catalog database ready at %s", url)
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
                app.state.session_factory = None

    docs_enabled = settings.docs_enabled
    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.time_provider = time_provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=settings.allowed_methods,
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    for router in catalog_routers():
        app.include_router(router)

    @app.get("/health", tags=["health"])
    async def health_check() -> Dict[str, str]:
        """Return a minimal health response for monitoring."""

        return {"status": "ok"}

    return app


__all__ = ["create_app"]
