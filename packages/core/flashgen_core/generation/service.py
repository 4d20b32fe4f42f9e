"""Flashcard generation and review service.

Generation turns input text into preview cards through a chat adapter with a
strict JSON-schema response format. Review applies a reviewer's decisions to
a stored batch, enforcing ownership, single review and the per-user flashcard
limit before persisting accepted and edited cards.

Review persistence is two separate store calls (insert flashcards, then update
batch counters) with no rollback between them. A failure in between leaves
the new flashcards in place while the batch still reads as unreviewed.
"""

import os
from datetime import datetime, timezone
from collections.abc import Callable, Sequence
from uuid import UUID

from flashgen_core.generation.errors import BatchErrorKind, FlashcardBatchError
from flashgen_core.generation.prompts import build_flashcard_generation_messages
from flashgen_core.generation.store import BaseFlashcardStore
from flashgen_core.model_adapters.base import BaseChatAdapter
from flashgen_core.model_adapters.errors import ChatClientError, ChatErrorKind
from flashgen_core.model_adapters.openrouter import OpenRouterAdapter
from flashgen_core.schemas.cards import (
    FLASHCARD_GENERATION_JSON_SCHEMA,
    FLASHCARD_LIMIT,
    AIGenerationBatch,
    AIGenerationBatchInsert,
    Flashcard,
    FlashcardDTO,
    FlashcardGenerationResponse,
    FlashcardInsert,
    GeneratedCardPreview,
    GenerationResult,
    ReviewAction,
    ReviewDecision,
    ReviewFlashcardsResponse,
)
from flashgen_core.schemas.chat import ChatClientConfig, ChatOptions, ResponseFormat
from flashgen_core.utils.logging import get_logger

logger = get_logger(__name__)

MIN_INPUT_LENGTH = 100
MAX_INPUT_LENGTH = 10000

GENERATION_MODEL = "openai/gpt-4o-mini"
GENERATION_TIMEOUT = 60.0  # seconds
GENERATION_MAX_RETRIES = 2
GENERATION_TEMPERATURE = 0.7
GENERATION_MAX_TOKENS = 4000

API_KEY_ENV_VAR = "OPENROUTER_API_KEY"

AdapterFactory = Callable[[str], BaseChatAdapter]


def default_adapter_factory(api_key: str) -> BaseChatAdapter:
    """Build the OpenRouter adapter used for generation."""
    return OpenRouterAdapter(
        ChatClientConfig(
            api_key=api_key,
            model=GENERATION_MODEL,
            timeout=GENERATION_TIMEOUT,
            max_retries=GENERATION_MAX_RETRIES,
        )
    )


def _rewrap_chat_error(error: ChatClientError) -> FlashcardBatchError:
    match error.kind:
        case ChatErrorKind.RATE_LIMIT:
            message = "Rate limit exceeded. Please try again in a few moments."
        case ChatErrorKind.VALIDATION:
            message = (
                "Failed to generate valid flashcards. "
                "Please try with different input text."
            )
        case _:
            message = "AI service is temporarily unavailable. Please try again later."
    return FlashcardBatchError.generation(message, details=error)


class FlashcardBatchService:
    """Generates preview cards and applies review decisions to batches."""

    def __init__(
        self,
        store: BaseFlashcardStore,
        default_api_key: str | None = None,
        adapter_factory: AdapterFactory = default_adapter_factory,
    ):
        """Initialize the service.

        Args:
            store: Persistence for batches and flashcards
            default_api_key: API key used when none is passed to generate()
            adapter_factory: Builds a chat adapter from an API key
        """
        self.store = store
        self.default_api_key = default_api_key
        self.adapter_factory = adapter_factory

    # Generation

    def _resolve_api_key(self, api_key: str | None) -> str:
        resolved = api_key or self.default_api_key or os.environ.get(API_KEY_ENV_VAR)
        if not resolved:
            raise FlashcardBatchError.generation(
                "OpenRouter API key is not configured. "
                f"Please set {API_KEY_ENV_VAR} environment variable."
            )
        return resolved

    async def generate(
        self, input_text: str, api_key: str | None = None
    ) -> GenerationResult:
        """Generate flashcard previews from input text.

        Args:
            input_text: Source text, 100-10000 characters
            api_key: Optional key overriding the instance default

        Returns:
            Zero-indexed previews and the model that produced them

        Raises:
            FlashcardBatchError: VALIDATION for bad input, GENERATION otherwise
        """
        if not input_text or len(input_text.strip()) < MIN_INPUT_LENGTH:
            raise FlashcardBatchError.validation(
                f"Input text must be at least {MIN_INPUT_LENGTH} characters long"
            )
        if len(input_text) > MAX_INPUT_LENGTH:
            raise FlashcardBatchError.validation(
                "Input text must not exceed 10,000 characters"
            )

        resolved_key = self._resolve_api_key(api_key)

        try:
            adapter = self.adapter_factory(resolved_key)
            response = await adapter.chat(
                build_flashcard_generation_messages(input_text),
                ChatOptions(
                    temperature=GENERATION_TEMPERATURE,
                    max_tokens=GENERATION_MAX_TOKENS,
                    response_format=ResponseFormat(
                        name="flashcard_generation",
                        strict=True,
                        json_schema=FLASHCARD_GENERATION_JSON_SCHEMA,
                        validator=FlashcardGenerationResponse,
                    ),
                ),
            )

            parsed = response.parsed_content
            if not isinstance(parsed, FlashcardGenerationResponse):
                raise FlashcardBatchError.generation(
                    "AI response did not contain valid flashcard data"
                )

            cards = [
                GeneratedCardPreview(
                    index=index, front_text=card.question, back_text=card.answer
                )
                for index, card in enumerate(parsed.flashcards)
            ]
            if not cards:
                raise FlashcardBatchError.generation(
                    "AI did not generate any flashcards"
                )
        except ChatClientError as e:
            logger.warning(f"Generation failed ({e.kind.value}): {e.message}")
            raise _rewrap_chat_error(e) from e
        except FlashcardBatchError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected generation failure: {e}")
            raise FlashcardBatchError.generation(
                "An unexpected error occurred during flashcard generation",
                details=e,
            ) from e

        logger.info(f"Generated {len(cards)} cards with {response.model}")
        return GenerationResult(cards=cards, model_used=response.model)

    async def record_batch(
        self,
        user_id: UUID,
        input_text_length: int,
        result: GenerationResult,
        time_taken_ms: int | None = None,
    ) -> AIGenerationBatch:
        """Persist a generation batch for later review.

        Args:
            user_id: Owner of the batch
            input_text_length: Length of the submitted input text
            result: Output of generate()
            time_taken_ms: Wall-clock generation time

        Returns:
            The stored batch with zeroed review counters
        """
        return await self.store.create_batch(
            AIGenerationBatchInsert(
                user_id=user_id,
                generated_at=datetime.now(timezone.utc),
                input_text_length=input_text_length,
                total_cards_generated=len(result.cards),
                time_taken_ms=time_taken_ms,
                model_used=result.model_used,
            )
        )

    # Review

    async def get_batch(self, batch_id: UUID, user_id: UUID) -> AIGenerationBatch | None:
        """Fetch a batch owned by the user, or None."""
        return await self.store.get_batch(batch_id, user_id)

    async def get_user_flashcard_count(self, user_id: UUID) -> int:
        """Count the user's flashcards."""
        return await self.store.count_flashcards(user_id)

    @staticmethod
    def to_flashcard_dto(flashcard: Flashcard) -> FlashcardDTO:
        """Strip the owner from a stored flashcard."""
        return FlashcardDTO.model_validate(flashcard.model_dump(exclude={"user_id"}))

    async def review(
        self,
        batch_id: UUID,
        user_id: UUID,
        decisions: Sequence[ReviewDecision],
    ) -> ReviewFlashcardsResponse:
        """Apply review decisions to a generation batch.

        Decision indices are assumed unique; the request boundary checks that.

        Args:
            batch_id: Batch under review
            user_id: Reviewer, who must own the batch
            decisions: One verdict per reviewed preview card

        Returns:
            Review counts and the flashcards created

        Raises:
            FlashcardBatchError: BATCH_NOT_FOUND, ALREADY_REVIEWED, VALIDATION
                or LIMIT_EXCEEDED
        """
        batch = await self.get_batch(batch_id, user_id)
        if batch is None:
            raise FlashcardBatchError(
                BatchErrorKind.BATCH_NOT_FOUND,
                "AI generation batch not found or does not belong to user",
            )

        if batch.is_reviewed:
            raise FlashcardBatchError(
                BatchErrorKind.ALREADY_REVIEWED,
                "This batch has already been reviewed",
            )

        max_index = max((d.index for d in decisions), default=-1)
        if max_index >= batch.total_cards_generated:
            raise FlashcardBatchError.validation(
                f"Index {max_index} is out of bounds. "
                f"Maximum allowed index is {batch.total_cards_generated - 1}"
            )

        accepted = [d for d in decisions if d.action == ReviewAction.ACCEPT]
        rejected = [d for d in decisions if d.action == ReviewAction.REJECT]
        edited = [d for d in decisions if d.action == ReviewAction.EDIT]
        to_create = accepted + edited

        current_count = await self.get_user_flashcard_count(user_id)
        if current_count + len(to_create) > FLASHCARD_LIMIT:
            raise FlashcardBatchError.limit_exceeded(
                f"Accepting these cards would exceed your limit of "
                f"{FLASHCARD_LIMIT} flashcards",
                current_count=current_count,
                limit=FLASHCARD_LIMIT,
            )

        rows = [
            FlashcardInsert(
                user_id=user_id,
                generation_batch_id=batch_id,
                front_text=decision.front_text,
                back_text=decision.back_text,
                is_ai_generated=True,
                was_edited=decision.action == ReviewAction.EDIT,
            )
            for decision in to_create
        ]

        created: list[Flashcard] = []
        if rows:
            created = await self.store.insert_flashcards(rows)

        await self.store.update_batch_counters(
            batch_id,
            cards_accepted=len(accepted),
            cards_rejected=len(rejected),
            cards_edited=len(edited),
        )

        logger.info(
            f"Reviewed batch {batch_id}: {len(accepted)} accepted, "
            f"{len(rejected)} rejected, {len(edited)} edited"
        )
        return ReviewFlashcardsResponse(
            batch_id=batch_id,
            cards_accepted=len(accepted),
            cards_rejected=len(rejected),
            cards_edited=len(edited),
            created_flashcards=[self.to_flashcard_dto(f) for f in created],
        )
