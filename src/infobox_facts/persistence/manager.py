# ABOUTME: Async database manager that stores extracted facts per theme using SQLModel
# ABOUTME: Used after a scan to persist the in-memory theme buffers into SQLite

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from infobox_facts.core.models import Fact, Theme
from infobox_facts.persistence.models import StoredFact
from infobox_facts.utils.logging import get_logger


class FactDatabase:
    """Manages async database operations for fact persistence."""

    def __init__(self, database_url: str = "sqlite+aiosqlite:///./infobox_facts.db"):
        """Initialize the database manager.

        Args:
            database_url: SQLAlchemy async database URL (e.g. sqlite+aiosqlite:///./facts.db)
        """
        self.database_url = database_url
        self.engine = create_async_engine(database_url, echo=False)
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Allow access to attributes after commit
        )
        self.logger = get_logger(__name__)

    async def create_tables(self) -> None:
        """Create all database tables if they don't exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def save_facts(self, theme: Theme, facts: Iterable[Fact]) -> int:
        """Append facts to a theme.

        Returns:
            Number of rows written
        """
        rows = [StoredFact.from_fact(theme.name, fact) for fact in facts]
        if not rows:
            return 0
        async with self.async_session() as session:
            session.add_all(rows)
            await session.commit()
        self.logger.info("Saved facts", theme=theme.name, fact_count=len(rows))
        return len(rows)

    async def get_facts(self, theme: Theme, subject: str | None = None) -> list[Fact]:
        """Facts of a theme in insertion order, optionally restricted to one subject."""
        async with self.async_session() as session:
            statement = select(StoredFact).where(StoredFact.theme == theme.name)
            if subject is not None:
                statement = statement.where(StoredFact.subject == subject)
            result = await session.exec(statement.order_by(StoredFact.id))  # type: ignore[arg-type]
            return [row.to_fact() for row in result.all()]

    async def count_facts(self, theme: Theme | None = None) -> int:
        async with self.async_session() as session:
            statement = select(func.count()).select_from(StoredFact)
            if theme is not None:
                statement = statement.where(StoredFact.theme == theme.name)
            result = await session.exec(statement)
            return int(result.one())

    async def clear(self, theme: Theme | None = None) -> None:
        """Delete stored facts, of one theme or all of them."""
        statement = delete(StoredFact)
        if theme is not None:
            statement = statement.where(StoredFact.theme == theme.name)  # type: ignore[arg-type]
        async with self.async_session() as session:
            # exec() only accepts SELECT statements, bulk deletes go through the connection
            await (await session.connection()).execute(statement)
            await session.commit()

    async def close(self) -> None:
        """Close the database connection."""
        await self.engine.dispose()
