"""Flashcard generation and review."""

from flashgen_core.generation.errors import BatchErrorKind, FlashcardBatchError
from flashgen_core.generation.prompts import (
    build_flashcard_generation_messages,
    calculate_recommended_card_count,
)
from flashgen_core.generation.service import FlashcardBatchService
from flashgen_core.generation.store import BaseFlashcardStore

__all__ = [
    "BaseFlashcardStore",
    "BatchErrorKind",
    "FlashcardBatchError",
    "FlashcardBatchService",
    "build_flashcard_generation_messages",
    "calculate_recommended_card_count",
]
