import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.routes import auth, jobs, admin, health
from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging_config import setup_logging
from app.db.base import Base
from app.db.session import build_engine, build_session_factory
from app.db import models  # noqa: F401  (registers every model on Base.metadata)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the schema exists, then dispose the engine on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_file)
    logger.info(f"Starting {settings.app_name}...")

    if settings.run_migrations:
        from app.db.migrate import run_migrations
        run_migrations(settings.database_url)
    else:
        Base.metadata.create_all(bind=app.state.engine)
        logger.info("Database tables verified")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The settings instance, engine and session factory live on app.state, so
    tests and scripts can run several independently configured apps.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Job portal API: accounts, job postings, applications and admin reporting",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(jobs.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    # Mounted last so API routes take precedence over static files at "/"
    if Path(settings.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.debug(f"Static directory not found, not serving files: {settings.static_dir}")

    return app


app = create_app()


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
