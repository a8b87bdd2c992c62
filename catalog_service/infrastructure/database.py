from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Float,
    DateTime,
    JSON,
    Index,
    MetaData,
    Table,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker


metadata = MetaData()

# One row per product document. Variants are embedded in a JSON column
# so every read and write of a product touches a single row.
products = Table(
    "products",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("price", Float, nullable=False),
    Column("category", String(255), nullable=False),
    Column("variants", JSON, nullable=False, default=list),  # [{id, color, size, stock}]
    Column("created_at", DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)),
    Column("updated_at", DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)),
    Index("idx_products_category", "category"),
)


# Raised by the store when it fails: SQLAlchemy wraps driver errors,
# but a refused or dropped connection surfaces as a plain OSError.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


class Database:
    """
    Owns the async engine of the catalog store.

    Created once at startup and kept on ``app.state.db``; requests
    borrow sessions from it through ``session()``.
    """

    def __init__(self, database_url: str, echo: bool = False, pool_size: int = 20):
        engine_options = {"echo": echo}
        # SQLite pools don't take size settings
        if make_url(database_url).get_backend_name() != "sqlite":
            engine_options.update(pool_size=pool_size, max_overflow=0)

        self.engine = create_async_engine(database_url, **engine_options)
        self._sessions = async_sessionmaker(self.engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._sessions() as session:
            yield session

    async def _run_schema(self, operation) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(operation)

    async def create_tables(self) -> None:
        await self._run_schema(metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop the catalog tables, tests use it to simulate a broken store"""
        await self._run_schema(metadata.drop_all)

    def describe(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    async def close(self) -> None:
        await self.engine.dispose()
