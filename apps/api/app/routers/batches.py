"""Flashcard generation batch routes."""

import time
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends

from flashgen_core.generation.errors import FlashcardBatchError
from flashgen_core.generation.service import FlashcardBatchService
from flashgen_core.schemas.cards import (
    GenerateFlashcardsResponse,
    ReviewFlashcardsResponse,
)

from app.dependencies import get_batch_service, get_current_user_id
from app.errors import ApiException
from app.schemas.api import GenerateFlashcardsRequest, ReviewFlashcardsRequest

router = APIRouter()
logger = structlog.get_logger()


@router.post("/flashcards/batch", response_model=GenerateFlashcardsResponse)
async def generate_batch(
    payload: GenerateFlashcardsRequest,
    user_id: UUID = Depends(get_current_user_id),
    service: FlashcardBatchService = Depends(get_batch_service),
) -> GenerateFlashcardsResponse:
    """Generate preview cards from text and record the batch."""
    started = time.perf_counter()
    result = await service.generate(payload.input_text)
    time_taken_ms = int((time.perf_counter() - started) * 1000)

    try:
        batch = await service.record_batch(
            user_id,
            input_text_length=len(payload.input_text),
            result=result,
            time_taken_ms=time_taken_ms,
        )
    except Exception as e:
        logger.exception("batch_record_failed", user_id=str(user_id))
        raise ApiException(
            500,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred while processing your request",
        ) from e

    logger.info(
        "batch_generated",
        batch_id=str(batch.id),
        cards=batch.total_cards_generated,
        time_taken_ms=time_taken_ms,
        model=batch.model_used,
    )
    return GenerateFlashcardsResponse(
        batch_id=batch.id,
        generated_at=batch.generated_at,
        input_text_length=batch.input_text_length,
        generated_cards=result.cards,
        total_cards_generated=batch.total_cards_generated,
        time_taken_ms=batch.time_taken_ms,
        model_used=batch.model_used,
    )


@router.post(
    "/flashcards/batch/{batch_id}/review",
    response_model=ReviewFlashcardsResponse,
    status_code=201,
)
async def review_batch(
    batch_id: str,
    payload: ReviewFlashcardsRequest,
    user_id: UUID = Depends(get_current_user_id),
    service: FlashcardBatchService = Depends(get_batch_service),
) -> ReviewFlashcardsResponse:
    """Apply review decisions to a generated batch."""
    try:
        parsed_batch_id = UUID(batch_id)
    except ValueError:
        raise ApiException(
            400,
            "VALIDATION_ERROR",
            "Invalid batch ID format. Must be a valid UUID.",
        ) from None

    try:
        response = await service.review(parsed_batch_id, user_id, payload.decisions)
    except FlashcardBatchError:
        raise
    except Exception as e:
        logger.exception("batch_review_failed", batch_id=batch_id)
        raise ApiException(
            500, "INTERNAL_SERVER_ERROR", "Failed to process review"
        ) from e

    logger.info(
        "batch_reviewed",
        batch_id=batch_id,
        accepted=response.cards_accepted,
        rejected=response.cards_rejected,
        edited=response.cards_edited,
    )
    return response
