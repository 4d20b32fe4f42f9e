"""Fixtures for API tests.

The app's engine is bound to an in-memory SQLite database; every test gets a
fresh schema through the get_db override.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ.pop("OPENROUTER_API_KEY", None)

from collections.abc import AsyncGenerator, Sequence  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import Depends  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from flashgen_core.generation.service import FlashcardBatchService  # noqa: E402
from flashgen_core.model_adapters.base import BaseChatAdapter  # noqa: E402
from flashgen_core.schemas.cards import (  # noqa: E402
    FlashcardGenerationResponse,
    GeneratedFlashcard,
)
from flashgen_core.schemas.chat import ChatMessage, ChatOptions, ChatResponse  # noqa: E402

from app.db.models import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.db.store import SqlAlchemyFlashcardStore  # noqa: E402
from app.dependencies import get_batch_service  # noqa: E402
from app.main import app  # noqa: E402


class FakeChatAdapter(BaseChatAdapter):
    """Returns three generated cards unless an error is set."""

    def __init__(self) -> None:
        self.error: Exception | None = None
        self.card_count = 3

    async def chat(
        self,
        messages: Sequence[ChatMessage],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        if self.error is not None:
            raise self.error
        cards = [
            GeneratedFlashcard(
                question=f"What is concept number {i}?",
                answer=f"Concept number {i} is explained here.",
            )
            for i in range(self.card_count)
        ]
        return ChatResponse(
            id="gen-1",
            model="openai/gpt-4o-mini",
            content="{}",
            parsed_content=FlashcardGenerationResponse(flashcards=cards),
        )


@pytest_asyncio.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def chat_adapter() -> FakeChatAdapter:
    return FakeChatAdapter()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest_asyncio.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    chat_adapter: FakeChatAdapter,
) -> AsyncGenerator[httpx.AsyncClient, None]:
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    async def override_get_batch_service(
        session: AsyncSession = Depends(get_db),
    ) -> FlashcardBatchService:
        return FlashcardBatchService(
            SqlAlchemyFlashcardStore(session),
            default_api_key="sk-test",
            adapter_factory=lambda key: chat_adapter,
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_batch_service] = override_get_batch_service
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
