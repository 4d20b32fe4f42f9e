"""Client-side review workflow: state machine, card decisions, API client."""

from flashgen_core.review.api_client import ApiRequestError, FlashcardApiClient
from flashgen_core.review.card_reviews import (
    BulkActionSummary,
    CardReviews,
    CardReviewState,
    build_review_decisions,
)
from flashgen_core.review.state import (
    Error,
    GenerationState,
    GenerationStateMachine,
    Generating,
    Idle,
    Reviewing,
    Submitting,
    Success,
)
from flashgen_core.review.text import CharacterCountState, calculate_character_count
from flashgen_core.review.workflow import GenerationWorkflow

__all__ = [
    "ApiRequestError",
    "BulkActionSummary",
    "CardReviewState",
    "CardReviews",
    "CharacterCountState",
    "Error",
    "FlashcardApiClient",
    "GenerationState",
    "GenerationStateMachine",
    "GenerationWorkflow",
    "Generating",
    "Idle",
    "Reviewing",
    "Submitting",
    "Success",
    "build_review_decisions",
    "calculate_character_count",
]
