"""Pydantic schemas shared by the core and the API."""

from flashgen_core.schemas.cards import (
    AIGenerationBatch,
    AIGenerationBatchInsert,
    ApiError,
    ApiErrorDetail,
    Flashcard,
    FlashcardDTO,
    FlashcardGenerationResponse,
    FlashcardInsert,
    GeneratedCardPreview,
    GeneratedFlashcard,
    GenerateFlashcardsResponse,
    GenerationResult,
    ReviewAction,
    ReviewDecision,
    ReviewFlashcardsResponse,
)
from flashgen_core.schemas.chat import (
    ChatClientConfig,
    ChatMessage,
    ChatOptions,
    ChatResponse,
    ResponseFormat,
    Usage,
)

__all__ = [
    # Chat
    "ChatClientConfig",
    "ChatMessage",
    "ChatOptions",
    "ChatResponse",
    "ResponseFormat",
    "Usage",
    # Cards and batches
    "AIGenerationBatch",
    "AIGenerationBatchInsert",
    "ApiError",
    "ApiErrorDetail",
    "Flashcard",
    "FlashcardDTO",
    "FlashcardGenerationResponse",
    "FlashcardInsert",
    "GeneratedCardPreview",
    "GeneratedFlashcard",
    "GenerateFlashcardsResponse",
    "GenerationResult",
    "ReviewAction",
    "ReviewDecision",
    "ReviewFlashcardsResponse",
]
