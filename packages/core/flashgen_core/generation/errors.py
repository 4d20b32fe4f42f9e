"""Domain errors for generation and review."""

from enum import Enum
from typing import Any


class BatchErrorKind(str, Enum):
    """Closed set of generation/review failures."""

    VALIDATION = "validation"
    GENERATION = "generation"
    BATCH_NOT_FOUND = "batch_not_found"
    ALREADY_REVIEWED = "already_reviewed"
    LIMIT_EXCEEDED = "limit_exceeded"


class FlashcardBatchError(Exception):
    """Raised by FlashcardBatchService; ``kind`` drives HTTP mapping."""

    def __init__(
        self,
        kind: BatchErrorKind,
        message: str,
        details: Any = None,
        current_count: int | None = None,
        limit: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.current_count = current_count
        self.limit = limit

    @classmethod
    def validation(cls, message: str, details: Any = None) -> "FlashcardBatchError":
        return cls(BatchErrorKind.VALIDATION, message, details)

    @classmethod
    def generation(cls, message: str, details: Any = None) -> "FlashcardBatchError":
        return cls(BatchErrorKind.GENERATION, message, details)

    @classmethod
    def limit_exceeded(
        cls, message: str, current_count: int, limit: int
    ) -> "FlashcardBatchError":
        return cls(
            BatchErrorKind.LIMIT_EXCEEDED,
            message,
            current_count=current_count,
            limit=limit,
        )

    def __repr__(self) -> str:
        return f"FlashcardBatchError(kind={self.kind.value!r}, message={self.message!r})"
