"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from orgstructure.config import get_settings
from orgstructure.infrastructure.database import Base, engine
from orgstructure.infrastructure.database.session import async_session_factory
from orgstructure.infrastructure.database.repositories import SQLAlchemyStructureTypeRepository
from orgstructure.application.services import StructureTypeSeeder
from orgstructure.infrastructure.logging.log_config import setup_logging
from orgstructure.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
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
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


def _ensure_sqlite_directory() -> None:
    """Create the parent directory of a file-based SQLite database."""
    url = make_url(get_settings().database_url)
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def _seed_structure_types() -> None:
    """Load the structure type catalogue. Idempotent — safe on every startup."""
    settings = get_settings()
    try:
        async with async_session_factory() as session:
            seeder = StructureTypeSeeder(
                SQLAlchemyStructureTypeRepository(session),
                settings.structure_types_file,
            )
            inserted = await seeder.seed()
            await session.commit()
            logger.info("Structure types seeded: %d new", inserted)
    except Exception:
        logger.exception("Failed to seed structure types — continuing without them")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — prepare the database and load reference data."""
    settings = get_settings()
    setup_logging()

    # 0. Ensure the database exists
    if engine.dialect.name == "postgresql":
        await _ensure_database_exists()
    elif engine.dialect.name == "sqlite":
        _ensure_sqlite_directory()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Seed the structure type catalogue
    if settings.seed_structure_types:
        await _seed_structure_types()

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

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "orgstructure.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
