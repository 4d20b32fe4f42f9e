"""Character-count validation for text inputs."""

from dataclasses import dataclass
from typing import Literal

CountStatus = Literal["too-short", "valid", "warning", "too-long"]

# Share of the maximum above which a valid count is flagged as a warning
WARNING_RATIO = 0.9


@dataclass(frozen=True)
class CharacterCountState:
    current: int
    min: int
    max: int
    is_valid: bool
    status: CountStatus


def calculate_character_count(text: str, min_length: int, max_length: int) -> CharacterCountState:
    """Count trimmed characters and classify against the bounds."""
    current = len(text.strip())
    status: CountStatus
    if current < min_length:
        status = "too-short"
    elif current > max_length:
        status = "too-long"
    elif current > max_length * WARNING_RATIO:
        status = "warning"
    else:
        status = "valid"

    return CharacterCountState(
        current=current,
        min=min_length,
        max=max_length,
        is_valid=min_length <= current <= max_length,
        status=status,
    )


def character_count_message(state: CharacterCountState) -> str:
    match state.status:
        case "too-short":
            return f"{state.current} / {state.min} characters (minimum {state.min} required)"
        case "too-long":
            return f"{state.current} / {state.max} characters (maximum {state.max} exceeded)"
        case "warning":
            return f"{state.current} / {state.max} characters (approaching limit)"
        case _:
            return f"{state.current} / {state.max} characters"
