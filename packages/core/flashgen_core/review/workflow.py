"""Client-side generation and review workflow.

Composes the state machine, the per-card reviews and the API client into the
single controller a presentation layer drives.
"""

from dataclasses import dataclass

from flashgen_core.review.api_client import ApiRequestError, FlashcardApiClient
from flashgen_core.review.card_reviews import CardReviews
from flashgen_core.review.state import (
    Error,
    GenerationState,
    GenerationStateMachine,
    Idle,
    Reviewing,
)
from flashgen_core.review.text import CharacterCountState, calculate_character_count
from flashgen_core.schemas.cards import (
    BACK_TEXT_MAX,
    BACK_TEXT_MIN,
    FRONT_TEXT_MAX,
    FRONT_TEXT_MIN,
    GenerateFlashcardsResponse,
)

# Bounds enforced by the generation endpoint
INPUT_MIN_LENGTH = 1000
INPUT_MAX_LENGTH = 10000


@dataclass(frozen=True)
class EditDialogState:
    is_open: bool = False
    card_index: int | None = None


class GenerationWorkflow:
    """Drives a generation from input text through review to submission."""

    def __init__(self, api: FlashcardApiClient):
        self.api = api
        self.input_text = ""
        self.machine = GenerationStateMachine()
        self.card_reviews = CardReviews()
        self.edit_dialog = EditDialogState()
        # Last generated batch, kept so a failed submission can be retried
        self._batch: GenerateFlashcardsResponse | None = None

    @property
    def state(self) -> GenerationState:
        return self.machine.state

    @property
    def char_count(self) -> CharacterCountState:
        return calculate_character_count(
            self.input_text, INPUT_MIN_LENGTH, INPUT_MAX_LENGTH
        )

    @property
    def can_generate(self) -> bool:
        return self.char_count.is_valid and isinstance(self.state, Idle)

    @property
    def can_submit_review(self) -> bool:
        """All cards must have a verdict before submitting."""
        return (
            isinstance(self.state, Reviewing)
            and self.card_reviews.summary.pending == 0
        )

    async def generate(self) -> None:
        self.machine.set_generating()
        try:
            data = await self.api.generate_flashcards(self.input_text)
        except ApiRequestError as e:
            self.machine.set_error(e.error, "generation")
            return
        self._batch = data
        self.card_reviews.initialize(data.generated_cards)
        self.machine.set_reviewing(data)

    async def retry_generation(self) -> None:
        await self.generate()

    async def submit_review(self) -> None:
        """Submit decisions; a no-op unless the workflow is reviewing."""
        state = self.state
        if not isinstance(state, Reviewing):
            return

        self.machine.set_submitting()
        try:
            result = await self.api.submit_review(
                state.data.batch_id, self.card_reviews.build_decisions()
            )
        except ApiRequestError as e:
            self.machine.set_error(e.error, "review")
            return
        self.machine.set_success(result)

    def resume_review(self) -> None:
        """Return to reviewing after a failed submission, keeping decisions."""
        state = self.state
        if isinstance(state, Error) and state.phase == "review" and self._batch:
            self.machine.set_reviewing(self._batch)

    def dismiss_error(self) -> None:
        if isinstance(self.state, Error):
            self.machine.reset()

    def open_edit_dialog(self, index: int) -> None:
        self.edit_dialog = EditDialogState(is_open=True, card_index=index)

    def close_edit_dialog(self) -> None:
        self.edit_dialog = EditDialogState()

    def save_edit(self, index: int, front_text: str, back_text: str) -> None:
        """Store an edit and close the dialog.

        Raises:
            ValueError: If either side is outside its length bounds; the
                dialog stays open
        """
        front = calculate_character_count(front_text, FRONT_TEXT_MIN, FRONT_TEXT_MAX)
        back = calculate_character_count(back_text, BACK_TEXT_MIN, BACK_TEXT_MAX)
        if not (front.is_valid and back.is_valid):
            raise ValueError(
                f"Front must be {FRONT_TEXT_MIN}-{FRONT_TEXT_MAX} characters and "
                f"back {BACK_TEXT_MIN}-{BACK_TEXT_MAX} characters"
            )
        self.card_reviews.edit(index, front_text.strip(), back_text.strip())
        self.close_edit_dialog()

    def reset(self) -> None:
        self.input_text = ""
        self._batch = None
        self.machine.reset()
        self.card_reviews.reset()
        self.close_edit_dialog()
