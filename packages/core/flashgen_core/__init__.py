"""flashgen-core: AI-assisted flashcard generation and review.

The package is organized in three layers:

Chat client:
    ``OpenRouterAdapter`` calls an OpenAI-compatible chat-completion API with
    retry/backoff and validates JSON-schema structured output.

Generation and review:
    ``FlashcardBatchService`` turns text into preview cards and applies
    reviewer decisions to stored batches through a ``BaseFlashcardStore``.

    >>> service = FlashcardBatchService(store, default_api_key=key)
    >>> result = await service.generate(text)
    >>> await service.review(batch_id, user_id, decisions)

Client workflow:
    ``GenerationWorkflow`` drives the idle -> generating -> reviewing ->
    submitting -> success/error state machine against the HTTP API.
"""

from flashgen_core.generation import (
    BaseFlashcardStore,
    BatchErrorKind,
    FlashcardBatchError,
    FlashcardBatchService,
)
from flashgen_core.model_adapters import (
    BaseChatAdapter,
    ChatClientError,
    ChatErrorKind,
    OpenRouterAdapter,
)
from flashgen_core.review import GenerationStateMachine, GenerationWorkflow

__version__ = "0.1.0"

__all__ = [
    # Chat client
    "BaseChatAdapter",
    "ChatClientError",
    "ChatErrorKind",
    "OpenRouterAdapter",
    # Generation and review
    "BaseFlashcardStore",
    "BatchErrorKind",
    "FlashcardBatchError",
    "FlashcardBatchService",
    # Client workflow
    "GenerationStateMachine",
    "GenerationWorkflow",
]
