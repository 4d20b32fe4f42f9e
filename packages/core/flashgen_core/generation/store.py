"""Storage interface consumed by the generation service."""

from abc import ABC, abstractmethod
from uuid import UUID

from flashgen_core.schemas.cards import (
    AIGenerationBatch,
    AIGenerationBatchInsert,
    Flashcard,
    FlashcardInsert,
)


class BaseFlashcardStore(ABC):
    """Abstract persistence for batches and flashcards."""

    @abstractmethod
    async def create_batch(self, batch: AIGenerationBatchInsert) -> AIGenerationBatch:
        """Insert a generation batch and return the stored row."""
        pass

    @abstractmethod
    async def get_batch(self, batch_id: UUID, user_id: UUID) -> AIGenerationBatch | None:
        """Fetch a batch by id, scoped to its owner.

        Returns:
            The batch, or None when missing or owned by another user
        """
        pass

    @abstractmethod
    async def count_flashcards(self, user_id: UUID) -> int:
        """Count flashcards owned by a user."""
        pass

    @abstractmethod
    async def insert_flashcards(self, rows: list[FlashcardInsert]) -> list[Flashcard]:
        """Insert flashcards and return the stored rows in input order."""
        pass

    @abstractmethod
    async def update_batch_counters(
        self,
        batch_id: UUID,
        cards_accepted: int,
        cards_rejected: int,
        cards_edited: int,
    ) -> None:
        """Overwrite the review counters of a batch."""
        pass
