"""Model adapters for chat-completion backends.

Supported providers:
- OpenRouter: any model exposed through the OpenAI-compatible
  ``/chat/completions`` endpoint, with JSON-schema structured output
"""

from flashgen_core.model_adapters.base import BaseChatAdapter
from flashgen_core.model_adapters.errors import ChatClientError, ChatErrorKind
from flashgen_core.model_adapters.openrouter import OpenRouterAdapter

__all__ = ["BaseChatAdapter", "ChatClientError", "ChatErrorKind", "OpenRouterAdapter"]
