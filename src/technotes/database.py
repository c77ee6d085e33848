"""Database client handle.

The application builds one ``Database`` per process in the app factory and
keeps it on ``app.state``. Request handlers receive sessions through the
``get_db_session`` dependency instead of importing an engine.
"""

from typing import Any, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .core.exceptions import DatabaseError
from .core.logging import get_logger, log_db_connection_error
from .core.models import BaseModel

logger = get_logger("database")


class Database:
    """Owns the async engine and session factory."""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    @property
    def hostname(self) -> Optional[str]:
        return make_url(self.url).host

    async def connect(self) -> None:
        """Create the engine and check that the server answers.

        Raises DatabaseError when the database can't be reached; the failure is
        also appended to the database error log.
        """
        if self.engine is not None:
            return

        engine = create_async_engine(self.url, echo=self.echo, **self.engine_kwargs)
        if engine.dialect.name == "sqlite":
            # sqlite leaves foreign keys off unless asked
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            await engine.dispose()
            log_db_connection_error(exc, self.hostname)
            raise DatabaseError(
                "Could not connect to the database",
                context={"hostname": self.hostname, "error": str(exc)},
            ) from exc

        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("Connected to database", extra={"hostname": self.hostname})

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    async def create_tables(self) -> None:
        """Create all tables."""
        async with self._require_engine().begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self._require_engine().begin() as conn:
            await conn.run_sync(BaseModel.metadata.drop_all)

    def session(self) -> AsyncSession:
        """Open a new session; use as an async context manager."""
        if self._session_factory is None:
            raise DatabaseError("Database is not connected")
        return self._session_factory()

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise DatabaseError("Database is not connected")
        return self.engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
