"""Pydantic schemas for API request models.

Response bodies reuse the core schemas in flashgen_core.schemas.cards.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flashgen_core.schemas.cards import ReviewDecision

INPUT_TEXT_MIN = 1000
INPUT_TEXT_MAX = 10000


class GenerateFlashcardsRequest(BaseModel):
    """Payload for generating a batch of flashcards."""

    model_config = ConfigDict(str_strip_whitespace=True)

    input_text: str = Field(..., min_length=INPUT_TEXT_MIN, max_length=INPUT_TEXT_MAX)


class ReviewFlashcardsRequest(BaseModel):
    """Payload for reviewing a generated batch."""

    decisions: list[ReviewDecision] = Field(..., min_length=1)

    @field_validator("decisions")
    @classmethod
    def indices_are_unique(cls, decisions: list[ReviewDecision]) -> list[ReviewDecision]:
        indices = [decision.index for decision in decisions]
        if len(indices) != len(set(indices)):
            raise ValueError("Duplicate indices found in decisions array")
        return decisions
