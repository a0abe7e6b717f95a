"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from static_cms.config import get_settings
from static_cms.infrastructure.database import Base, engine
from static_cms.infrastructure.database.session import async_session_factory
from static_cms.infrastructure.database.repositories import SQLAlchemyConfigStore
from static_cms.infrastructure.dependencies import get_auto_build_dispatcher
from static_cms.infrastructure.logging.log_config import setup_logging
from static_cms.presentation.api.responses import validation_error_handler
from static_cms.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

# Config keys written on first startup so the admin UI has something to show.
_DEFAULT_CONFIG = {
    "site_name": "CMS",
    "index_template": "index",
    "current_template_theme": "default",
    "recycle_bin_enable": "open",
}


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    SQLite files are created by the driver, so other URLs are skipped.
    """
    from urllib.parse import urlparse

    settings = get_settings()
    if not settings.database_url.startswith("postgresql"):
        return

    import asyncpg

    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_default_config() -> None:
    """Insert missing default config values. Idempotent — safe on every startup."""
    async with async_session_factory() as session:
        store = SQLAlchemyConfigStore(session)
        existing = await store.get_all()
        missing = {k: v for k, v in _DEFAULT_CONFIG.items() if k not in existing}
        for key, value in missing.items():
            await store.set(key, value)
        await session.commit()
    if missing:
        logger.info("Seeded default config keys: %s", ", ".join(sorted(missing)))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, seed config, start the auto-build worker."""
    settings = get_settings()
    setup_logging()

    # 0. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Seed default site configuration
    await _seed_default_config()

    # 3. Ensure the static output directory exists
    Path(settings.static_output_dir).mkdir(parents=True, exist_ok=True)

    # 4. Start the automatic build worker
    dispatcher = get_auto_build_dispatcher()
    await dispatcher.start()

    yield

    # Shutdown
    await dispatcher.stop()
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Serve the generated site
    if settings.mount_static_output:
        output_dir = Path(settings.static_output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        app.mount(
            f"/{settings.static_url_segment}",
            StaticFiles(directory=output_dir, html=True),
            name="static_site",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "static_cms.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
