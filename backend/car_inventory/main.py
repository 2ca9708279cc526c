"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from car_inventory.config import get_settings
from car_inventory.application.services import CatalogService
from car_inventory.domain.exceptions import StoreUnavailableError
from car_inventory.infrastructure.database import Base, engine
from car_inventory.infrastructure.database.session import async_session_factory
from car_inventory.infrastructure.database.repositories import SQLAlchemyCatalogRepository
from car_inventory.infrastructure.logging.log_config import setup_logging
from car_inventory.presentation.api.v1.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith("postgresql"):
        return

    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    # asyncpg expects a plain postgresql:// URL without the SQLAlchemy driver suffix
    maintenance_url = settings.database_url.replace("postgresql+asyncpg://", "postgresql://", 1)
    maintenance_url = maintenance_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url, timeout=settings.db_pool_timeout)
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
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_default_catalogs() -> None:
    """Load the default brand/model catalog when the catalog table is empty."""
    try:
        async with async_session_factory() as session:
            service = CatalogService(SQLAlchemyCatalogRepository(session))
            if await service.seed_if_empty():
                await session.commit()
                logger.info("Seeded default catalogs")
            else:
                logger.debug("Catalog already populated, skipping seed")
    except Exception as exc:
        logger.warning("Could not seed default catalogs: %s", exc)


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    """Timeouts and connectivity failures are transient: 503 so clients retry."""
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
        headers={"Retry-After": "5"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, seed catalogs, prepare uploads."""
    settings = get_settings()
    setup_logging()

    # 0. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Seed the reference catalog
    if settings.seed_catalogs_on_startup:
        await _seed_default_catalogs()

    # 3. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    logger.info("%s %s started (%s)", settings.app_title, settings.app_version, settings.app_env)
    yield

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

    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "car_inventory.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
