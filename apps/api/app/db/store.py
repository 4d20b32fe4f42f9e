"""SQLAlchemy implementation of the flashcard store."""

from uuid import UUID

from flashgen_core.generation.store import BaseFlashcardStore
from flashgen_core.schemas.cards import (
    AIGenerationBatch,
    AIGenerationBatchInsert,
    Flashcard,
    FlashcardInsert,
)
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import models


class SqlAlchemyFlashcardStore(BaseFlashcardStore):
    """Batches and flashcards persisted through an AsyncSession.

    Every write commits on its own; callers get no cross-call transaction.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_batch(self, batch: AIGenerationBatchInsert) -> AIGenerationBatch:
        row = models.AIGenerationBatch(**batch.model_dump())
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return AIGenerationBatch.model_validate(row)

    async def get_batch(self, batch_id: UUID, user_id: UUID) -> AIGenerationBatch | None:
        result = await self.db.execute(
            select(models.AIGenerationBatch)
            .where(
                models.AIGenerationBatch.id == batch_id,
                models.AIGenerationBatch.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return AIGenerationBatch.model_validate(row)

    async def count_flashcards(self, user_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count(models.Flashcard.id)).where(
                models.Flashcard.user_id == user_id
            )
        )
        return result.scalar_one()

    async def insert_flashcards(self, rows: list[FlashcardInsert]) -> list[Flashcard]:
        created = [models.Flashcard(**row.model_dump()) for row in rows]
        self.db.add_all(created)
        await self.db.commit()
        for row in created:
            await self.db.refresh(row)
        return [Flashcard.model_validate(row) for row in created]

    async def update_batch_counters(
        self,
        batch_id: UUID,
        cards_accepted: int,
        cards_rejected: int,
        cards_edited: int,
    ) -> None:
        await self.db.execute(
            update(models.AIGenerationBatch)
            .where(models.AIGenerationBatch.id == batch_id)
            .values(
                cards_accepted=cards_accepted,
                cards_rejected=cards_rejected,
                cards_edited=cards_edited,
            )
        )
        await self.db.commit()
