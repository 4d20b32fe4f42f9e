"""Per-card review decisions tracked on the client."""

from dataclasses import dataclass, replace
from typing import Literal

from flashgen_core.schemas.cards import (
    GeneratedCardPreview,
    ReviewAction,
    ReviewDecision,
)

CardAction = Literal["pending", "accept", "reject", "edit"]


@dataclass(frozen=True)
class CardReviewState:
    """Review status of one generated card."""

    index: int
    action: CardAction
    original_card: GeneratedCardPreview
    edited_card: GeneratedCardPreview | None = None
    is_flipped: bool = False


@dataclass(frozen=True)
class BulkActionSummary:
    """Counts of cards per review action."""

    total: int = 0
    accepted: int = 0
    rejected: int = 0
    edited: int = 0
    pending: int = 0


def initialize_card_reviews(
    cards: list[GeneratedCardPreview],
) -> dict[int, CardReviewState]:
    """Start every card as pending."""
    return {
        card.index: CardReviewState(index=card.index, action="pending", original_card=card)
        for card in cards
    }


def calculate_bulk_summary(reviews: list[CardReviewState]) -> BulkActionSummary:
    actions = [r.action for r in reviews]
    return BulkActionSummary(
        total=len(actions),
        accepted=actions.count("accept"),
        rejected=actions.count("reject"),
        edited=actions.count("edit"),
        pending=actions.count("pending"),
    )


def build_review_decisions(reviews: list[CardReviewState]) -> list[ReviewDecision]:
    """Turn non-pending reviews into decisions; edits carry the edited text."""
    decisions = []
    for review in reviews:
        if review.action == "pending":
            continue
        card = review.original_card
        if review.action == "edit" and review.edited_card is not None:
            card = review.edited_card
        decisions.append(
            ReviewDecision(
                index=review.index,
                action=ReviewAction(review.action),
                front_text=card.front_text,
                back_text=card.back_text,
            )
        )
    return decisions


class CardReviews:
    """Collection of CardReviewState keyed by card index.

    Entries are immutable; each action swaps in a new value for its index.
    Unknown indices raise KeyError.
    """

    def __init__(self) -> None:
        self._reviews: dict[int, CardReviewState] = {}

    @property
    def reviews(self) -> list[CardReviewState]:
        return list(self._reviews.values())

    @property
    def summary(self) -> BulkActionSummary:
        return calculate_bulk_summary(self.reviews)

    def get(self, index: int) -> CardReviewState:
        return self._reviews[index]

    def initialize(self, cards: list[GeneratedCardPreview]) -> None:
        self._reviews = initialize_card_reviews(cards)

    def _update(self, index: int, **changes: object) -> None:
        self._reviews[index] = replace(self._reviews[index], **changes)

    def accept(self, index: int) -> None:
        self._update(index, action="accept", edited_card=None)

    def reject(self, index: int) -> None:
        self._update(index, action="reject", edited_card=None)

    def edit(self, index: int, front_text: str, back_text: str) -> None:
        self._update(
            index,
            action="edit",
            edited_card=GeneratedCardPreview(
                index=index, front_text=front_text, back_text=back_text
            ),
        )

    def toggle_flip(self, index: int) -> None:
        self._update(index, is_flipped=not self._reviews[index].is_flipped)

    def accept_all(self) -> None:
        """Accept every card still pending."""
        for review in self.reviews:
            if review.action == "pending":
                self._update(review.index, action="accept")

    def reject_all(self) -> None:
        """Reject every card still pending."""
        for review in self.reviews:
            if review.action == "pending":
                self._update(review.index, action="reject")

    def build_decisions(self) -> list[ReviewDecision]:
        return build_review_decisions(self.reviews)

    def reset(self) -> None:
        self._reviews = {}
