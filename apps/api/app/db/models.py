"""Database models for the flashgen API."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AIGenerationBatch(Base):
    """One AI generation request and its review outcome."""

    __tablename__ = "ai_generation_batches"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    input_text_length: Mapped[int] = mapped_column(Integer, nullable=False)
    total_cards_generated: Mapped[int] = mapped_column(Integer, nullable=False)
    cards_accepted: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    cards_rejected: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    cards_edited: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    time_taken_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    model_used: Mapped[str | None] = mapped_column(String(100), nullable=True)

    flashcards: Mapped[list["Flashcard"]] = relationship(back_populates="batch")


class Flashcard(Base):
    """A flashcard owned by a user, manual or AI generated."""

    __tablename__ = "flashcards"
    __table_args__ = (
        CheckConstraint("length(front_text) >= 10", name="ck_flashcards_front_min"),
        CheckConstraint("length(back_text) >= 10", name="ck_flashcards_back_min"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    generation_batch_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("ai_generation_batches.id", ondelete="SET NULL"),
        nullable=True,
    )
    front_text: Mapped[str] = mapped_column(String(500), nullable=False)
    back_text: Mapped[str] = mapped_column(String(1000), nullable=False)
    is_ai_generated: Mapped[bool] = mapped_column(Boolean, nullable=False)
    was_edited: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    batch: Mapped["AIGenerationBatch | None"] = relationship(
        back_populates="flashcards"
    )
