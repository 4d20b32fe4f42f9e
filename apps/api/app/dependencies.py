"""Request-scoped dependencies."""

from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from flashgen_core.generation.service import FlashcardBatchService

from app.db.session import get_db
from app.db.store import SqlAlchemyFlashcardStore
from app.errors import ApiException
from app.settings import settings


async def get_current_user_id(
    x_user_id: str | None = Header(default=None),
) -> UUID:
    """Resolve the caller from the X-User-Id header set by the auth proxy."""
    if not x_user_id:
        raise ApiException(401, "UNAUTHORIZED", "Missing X-User-Id header")
    try:
        return UUID(x_user_id)
    except ValueError:
        raise ApiException(401, "UNAUTHORIZED", "Invalid X-User-Id header") from None


async def get_batch_service(
    db: AsyncSession = Depends(get_db),
) -> FlashcardBatchService:
    """Dependency that provides a batch service bound to the request session."""
    return FlashcardBatchService(
        SqlAlchemyFlashcardStore(db),
        default_api_key=settings.openrouter_api_key,
    )
