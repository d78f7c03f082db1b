"""Application lifespan management for startup and shutdown events."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pokedexdb.system.structlog_configurator import configure_structlog
from pokedexdb.web.core.container import Container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging, create tables on startup and release the engine on shutdown."""
    container: Container = app.container  # type: ignore[attr-defined]

    config = container.config()
    configure_structlog(config)

    core_database = container.core_database()
    await core_database.initialize()
    logger.info("Database ready at %s", core_database.db_path)

    try:
        yield
    finally:
        logger.info("Shutting down, disposing database engine")
        await core_database.dispose()
