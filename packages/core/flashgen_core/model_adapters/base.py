"""Base chat adapter interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from flashgen_core.schemas.chat import ChatMessage, ChatOptions, ChatResponse


class BaseChatAdapter(ABC):
    """Abstract base class for chat-completion backends."""

    @abstractmethod
    async def chat(
        self,
        messages: Sequence[ChatMessage | dict[str, str]],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """Run a single chat completion.

        Args:
            messages: Ordered conversation, 1-50 messages
            options: Optional sampling parameters and response format

        Returns:
            Normalized response; ``parsed_content`` is set only when a
            validator was supplied and the content validated

        Raises:
            ChatClientError: On any non-recoverable condition
        """
        pass
