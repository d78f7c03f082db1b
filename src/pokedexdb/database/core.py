import contextlib
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,  # type: ignore[attr-defined]
    create_async_engine,
)
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


class CoreDatabaseService:
    """Owns the async engine and session factory for the Pokémon store."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.db_url = f"sqlite+aiosqlite:///{self.db_path}"

        self.async_engine = create_async_engine(
            self.db_url,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

        self.async_session_local = async_sessionmaker(
            autocommit=False, autoflush=False, bind=self.async_engine, class_=AsyncSession
        )

        # Tables are created by initialize()

    async def initialize(self) -> None:
        """Create tables and apply connection pragmas."""
        # Register table metadata before create_all
        from pokedexdb.pokemon import models  # noqa: F401

        async with self.async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        await self._apply_startup_optimizations()

    @contextlib.asynccontextmanager
    async def get_async_db(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an async database session for dependency injection."""
        async with self.async_session_local() as session:
            yield session

    async def _apply_startup_optimizations(self) -> None:
        """Apply one-time SQLite pragmas for a read-mostly workload."""
        async with self.get_async_db() as session:
            try:
                await session.execute(text("PRAGMA journal_mode = WAL"))
                await session.execute(text("PRAGMA synchronous = NORMAL"))
                await session.execute(text("PRAGMA temp_store = MEMORY"))
                await session.execute(text("PRAGMA cache_size = -16000"))
                await session.execute(text("PRAGMA optimize"))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.warning("Failed to apply startup optimizations: %s", e)

    async def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        async with self.get_async_db() as session:
            try:
                await session.execute(text("SELECT 1"))
                return True
            except SQLAlchemyError as e:
                logger.warning("Database ping failed: %s", e)
                return False

    async def dispose(self) -> None:
        """Dispose of the async engine to release file descriptors."""
        if hasattr(self, "async_engine") and self.async_engine:
            await self.async_engine.dispose()
            logger.debug("Async database engine disposed")
