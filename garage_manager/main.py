"""FastAPI entrypoint for the Garage Maintenance backend.

This file stays intentionally small so feature modules can be added cleanly:
- `routes/` for garage, car and maintenance endpoints
- `services/` for CRUD and reporting business logic
- `db/` for SQLAlchemy models and session management
- `core/` for settings, errors and middleware

Run with::

    uvicorn garage_manager.main:app --reload
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from garage_manager.core.config import Settings, get_settings
from garage_manager.core.exceptions import register_exception_handlers
from garage_manager.core.middleware import RequestContextMiddleware
from garage_manager.db.init_db import init_db
from garage_manager.db.session import build_session_factory, create_db_engine
from garage_manager.routes import cars, garages, maintenance

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an application bound to its own engine and session factory."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    engine = create_db_engine(settings.database_url, echo=settings.sql_echo)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        """Initialize app resources before serving traffic."""
        # Ensure SQL tables exist at app startup.
        init_db(engine)
        logger.info("Database tables initialized.")

        yield

        engine.dispose()
        logger.info("Database connections released.")

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description="Garage, car and maintenance management with capacity reporting.",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(garages.router)
    app.include_router(cars.router)
    app.include_router(maintenance.router)

    @app.get("/", tags=["health"])
    def root() -> dict[str, str]:
        """Simple status endpoint for uptime checks."""
        return {"status": "Garage Maintenance API Running"}

    return app


app = create_app()
