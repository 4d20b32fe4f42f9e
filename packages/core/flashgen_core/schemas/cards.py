"""Flashcard, batch and review schemas."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

FRONT_TEXT_MIN = 10
FRONT_TEXT_MAX = 500
BACK_TEXT_MIN = 10
BACK_TEXT_MAX = 1000

MAX_GENERATED_CARDS = 50
FLASHCARD_LIMIT = 500


class ReviewAction(str, Enum):
    """Verdict a reviewer gives a generated card."""

    ACCEPT = "accept"
    REJECT = "reject"
    EDIT = "edit"


class GeneratedFlashcard(BaseModel):
    """A single question/answer pair as produced by the model."""

    question: str = Field(..., min_length=FRONT_TEXT_MIN, max_length=FRONT_TEXT_MAX)
    answer: str = Field(..., min_length=BACK_TEXT_MIN, max_length=BACK_TEXT_MAX)


class FlashcardGenerationResponse(BaseModel):
    """Structured output expected from the model."""

    flashcards: list[GeneratedFlashcard] = Field(
        ..., min_length=1, max_length=MAX_GENERATED_CARDS
    )


class GeneratedCardPreview(BaseModel):
    """A generated card awaiting review. Not persisted."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    front_text: str
    back_text: str


class GenerationResult(BaseModel):
    """Previews plus the model that produced them."""

    cards: list[GeneratedCardPreview]
    model_used: str


class ReviewDecision(BaseModel):
    """A reviewer's verdict on one preview card."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    index: int = Field(..., ge=0)
    action: ReviewAction
    front_text: str = Field(..., min_length=FRONT_TEXT_MIN, max_length=FRONT_TEXT_MAX)
    back_text: str = Field(..., min_length=BACK_TEXT_MIN, max_length=BACK_TEXT_MAX)


class AIGenerationBatch(BaseModel):
    """Persisted record of one generation request."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    generated_at: datetime
    input_text_length: int
    total_cards_generated: int
    cards_accepted: int = 0
    cards_rejected: int = 0
    cards_edited: int = 0
    time_taken_ms: int | None = None
    model_used: str | None = None

    @property
    def is_reviewed(self) -> bool:
        return self.cards_accepted + self.cards_rejected > 0


class AIGenerationBatchInsert(BaseModel):
    """Row payload for a new generation batch."""

    user_id: UUID
    generated_at: datetime
    input_text_length: int
    total_cards_generated: int
    cards_accepted: int = 0
    cards_rejected: int = 0
    cards_edited: int = 0
    time_taken_ms: int | None = None
    model_used: str | None = None


class FlashcardInsert(BaseModel):
    """Row payload for a new flashcard."""

    user_id: UUID
    generation_batch_id: UUID | None = None
    front_text: str
    back_text: str
    is_ai_generated: bool
    was_edited: bool


class Flashcard(BaseModel):
    """Persisted flashcard owned by a user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    front_text: str
    back_text: str
    generation_batch_id: UUID | None = None
    is_ai_generated: bool
    was_edited: bool
    created_at: datetime
    updated_at: datetime


class FlashcardDTO(BaseModel):
    """Public flashcard view; owner is implied by the caller."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    front_text: str
    back_text: str
    generation_batch_id: UUID | None = None
    is_ai_generated: bool
    was_edited: bool
    created_at: datetime
    updated_at: datetime


class ReviewFlashcardsResponse(BaseModel):
    """Outcome of applying review decisions to a batch."""

    batch_id: UUID
    cards_accepted: int
    cards_rejected: int
    cards_edited: int
    created_flashcards: list[FlashcardDTO]


class GenerateFlashcardsResponse(BaseModel):
    """Outcome of a generation request."""

    batch_id: UUID
    generated_at: datetime
    input_text_length: int
    generated_cards: list[GeneratedCardPreview]
    total_cards_generated: int
    time_taken_ms: int | None = None
    model_used: str | None = None


class ApiErrorDetail(BaseModel):
    """Field-level validation problem."""

    field: str
    message: str
    received_length: int | None = None


class ApiError(BaseModel):
    """Error payload returned by the HTTP boundary."""

    error: str
    message: str
    details: list[ApiErrorDetail] | None = None
    current_count: int | None = None
    limit: int | None = None
    suggestion: str | None = None


# JSON Schema sent to the model as the structured-output contract. Mirrors
# FlashcardGenerationResponse; strict mode requires additionalProperties=false.
FLASHCARD_GENERATION_JSON_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "flashcards": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "question": {
                        "type": "string",
                        "minLength": FRONT_TEXT_MIN,
                        "maxLength": FRONT_TEXT_MAX,
                        "description": "Clear, concise question for the front of the flashcard",
                    },
                    "answer": {
                        "type": "string",
                        "minLength": BACK_TEXT_MIN,
                        "maxLength": BACK_TEXT_MAX,
                        "description": "Comprehensive answer for the back of the flashcard",
                    },
                },
                "required": ["question", "answer"],
                "additionalProperties": False,
            },
            "minItems": 1,
            "maxItems": MAX_GENERATED_CARDS,
        },
    },
    "required": ["flashcards"],
    "additionalProperties": False,
}
