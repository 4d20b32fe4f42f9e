"""Chat client error kinds."""

from enum import Enum
from typing import Any


class ChatErrorKind(str, Enum):
    """Closed set of failures the chat client can report."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    MODEL_UNAVAILABLE = "model_unavailable"
    SERVER = "server"
    RESPONSE_STRUCTURE = "response_structure"
    NETWORK = "network"
    API = "api"


class ChatClientError(Exception):
    """Raised by chat adapters for any non-recoverable condition."""

    def __init__(
        self,
        kind: ChatErrorKind,
        message: str,
        details: Any = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ChatClientError(kind={self.kind.value!r}, message={self.message!r})"


# Final HTTP status -> (kind, fixed message). A None message means the
# message is taken from the error payload.
_STATUS_KINDS: dict[int, tuple[ChatErrorKind, str | None]] = {
    400: (ChatErrorKind.VALIDATION, None),
    401: (ChatErrorKind.AUTH, "Invalid API key"),
    403: (ChatErrorKind.AUTH, "Access forbidden"),
    404: (ChatErrorKind.MODEL_UNAVAILABLE, "Model not found or not available"),
    429: (ChatErrorKind.RATE_LIMIT, "Rate limit exceeded"),
    500: (ChatErrorKind.SERVER, "OpenRouter service error"),
    502: (ChatErrorKind.SERVER, "OpenRouter service error"),
    503: (ChatErrorKind.SERVER, "OpenRouter service error"),
}


def error_for_status(status_code: int, payload: dict[str, Any]) -> ChatClientError:
    """Classify a failed HTTP response.

    Args:
        status_code: Final HTTP status of the call
        payload: Decoded error body, or a fallback dict if it was not JSON

    Returns:
        ChatClientError carrying the payload as details
    """
    error_block = payload.get("error")
    payload_message = None
    if isinstance(error_block, dict):
        payload_message = error_block.get("message")
    payload_message = payload_message or payload.get("message") or "OpenRouter API error"

    kind, message = _STATUS_KINDS.get(status_code, (ChatErrorKind.API, None))
    return ChatClientError(
        kind,
        message or payload_message,
        details=payload,
        status_code=status_code,
    )
