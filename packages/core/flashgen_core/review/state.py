"""Generation workflow state machine.

The workflow is always in exactly one state. States are immutable values and
every transition replaces the current one wholesale:

    idle -> generating -> reviewing -> submitting -> success
                 \\                          \\
                  -> error(generation)        -> error(review)

Any state may be reset to idle.
"""

from dataclasses import dataclass
from typing import ClassVar, Literal

from flashgen_core.schemas.cards import (
    ApiError,
    GenerateFlashcardsResponse,
    ReviewFlashcardsResponse,
)

ErrorPhase = Literal["generation", "review"]


@dataclass(frozen=True)
class Idle:
    status: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Generating:
    status: ClassVar[str] = "generating"


@dataclass(frozen=True)
class Reviewing:
    data: GenerateFlashcardsResponse
    status: ClassVar[str] = "reviewing"


@dataclass(frozen=True)
class Submitting:
    status: ClassVar[str] = "submitting"


@dataclass(frozen=True)
class Success:
    data: ReviewFlashcardsResponse
    status: ClassVar[str] = "success"


@dataclass(frozen=True)
class Error:
    error: ApiError
    phase: ErrorPhase
    status: ClassVar[str] = "error"


GenerationState = Idle | Generating | Reviewing | Submitting | Success | Error


class GenerationStateMachine:
    """Owner of the current GenerationState."""

    def __init__(self) -> None:
        self._state: GenerationState = Idle()

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def status(self) -> str:
        return self._state.status

    def set_generating(self) -> None:
        self._state = Generating()

    def set_reviewing(self, data: GenerateFlashcardsResponse) -> None:
        self._state = Reviewing(data=data)

    def set_submitting(self) -> None:
        self._state = Submitting()

    def set_success(self, data: ReviewFlashcardsResponse) -> None:
        self._state = Success(data=data)

    def set_error(self, error: ApiError, phase: ErrorPhase) -> None:
        self._state = Error(error=error, phase=phase)

    def reset(self) -> None:
        self._state = Idle()
