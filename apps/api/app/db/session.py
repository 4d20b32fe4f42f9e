"""Async engine and per-request sessions for the batch and flashcard tables."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.settings import settings

engine = create_async_engine(
    settings.database_url, echo=settings.debug, pool_pre_ping=True
)
# Rows stay readable after commit; the store converts them to pydantic models
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session scoped to one request.

    SqlAlchemyFlashcardStore commits per write, so nothing is committed here.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """Create ai_generation_batches and flashcards if they do not exist."""
    from app.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
