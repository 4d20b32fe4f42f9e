"""OpenRouter chat-completion adapter."""

import asyncio
import json
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from flashgen_core.model_adapters.base import BaseChatAdapter
from flashgen_core.model_adapters.errors import (
    ChatClientError,
    ChatErrorKind,
    error_for_status,
)
from flashgen_core.schemas.chat import (
    MAX_MESSAGES,
    ChatClientConfig,
    ChatMessage,
    ChatOptions,
    ChatResponse,
    Usage,
    ValidatorModel,
)
from flashgen_core.utils.logging import get_logger, mask_secret
from flashgen_core.utils.retry import RETRYABLE_EXCEPTIONS, SleepFunc, with_retry

logger = get_logger(__name__)

_messages_adapter = TypeAdapter(list[ChatMessage])

# ChatOptions field -> request body key
_SAMPLING_FIELDS = (
    "temperature",
    "max_tokens",
    "top_p",
    "frequency_penalty",
    "presence_penalty",
    "stop",
)


def _validate_messages(
    messages: Sequence[ChatMessage | dict[str, str]],
) -> list[ChatMessage]:
    if not 1 <= len(messages) <= MAX_MESSAGES:
        raise ChatClientError(
            ChatErrorKind.VALIDATION,
            f"Expected between 1 and {MAX_MESSAGES} messages, got {len(messages)}",
        )
    try:
        return _messages_adapter.validate_python(
            [m.model_dump() if isinstance(m, ChatMessage) else m for m in messages]
        )
    except ValidationError as e:
        raise ChatClientError(
            ChatErrorKind.VALIDATION, "Invalid chat messages", details=e.errors()
        ) from e


class OpenRouterAdapter(BaseChatAdapter):
    """Adapter for the OpenRouter chat-completion API."""

    def __init__(
        self,
        config: ChatClientConfig | dict[str, Any],
        http_client: httpx.AsyncClient | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initialize the OpenRouter adapter.

        Args:
            config: Client configuration (validated here)
            http_client: Optional shared HTTP client; one is opened per call otherwise
            sleep: Coroutine used for backoff waits between retries
        """
        if isinstance(config, ChatClientConfig):
            self.config = config
        else:
            try:
                self.config = ChatClientConfig.model_validate(config)
            except ValidationError as e:
                raise ChatClientError(
                    ChatErrorKind.CONFIGURATION,
                    "Invalid chat client configuration",
                    details=e.errors(include_input=False),
                ) from e

        self._http_client = http_client
        self._sleep = sleep
        logger.info(
            f"Initialized OpenRouter adapter (model={self.config.model}, "
            f"key={mask_secret(self.config.api_key)}, "
            f"max_retries={self.config.max_retries})"
        )

    def build_request(
        self,
        messages: list[ChatMessage],
        options: ChatOptions | None = None,
    ) -> tuple[dict[str, str], dict[str, Any]]:
        """Build headers and JSON body for a completion call.

        Args:
            messages: Validated messages
            options: Optional per-call overrides

        Returns:
            Tuple of (headers, body)
        """
        options = options or ChatOptions()
        body: dict[str, Any] = {
            "model": options.model or self.config.model,
            "messages": [m.model_dump() for m in messages],
        }

        for field in _SAMPLING_FIELDS:
            value = getattr(options, field)
            if value is not None:
                body[field] = value

        if options.response_format is not None:
            body["response_format"] = options.response_format.to_payload()

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        if self.config.site_url is not None:
            headers["HTTP-Referer"] = str(self.config.site_url)
        if self.config.site_name:
            headers["X-Title"] = self.config.site_name

        return headers, body

    async def _post(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> httpx.Response:
        return await asyncio.wait_for(
            client.post(
                self.config.completions_url,
                headers=headers,
                json=body,
                timeout=self.config.timeout,
            ),
            timeout=self.config.timeout,
        )

    async def _send(
        self,
        client: httpx.AsyncClient,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> httpx.Response:
        return await with_retry(
            self._post,
            client,
            headers,
            body,
            max_retries=self.config.max_retries,
            operation_name="chat_completion",
            sleep=self._sleep,
        )

    async def _execute(
        self,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> httpx.Response:
        """Send the request, retrying transient failures."""
        try:
            if self._http_client is not None:
                return await self._send(self._http_client, headers, body)
            async with httpx.AsyncClient() as client:
                return await self._send(client, headers, body)
        except RETRYABLE_EXCEPTIONS as e:
            raise ChatClientError(
                ChatErrorKind.NETWORK,
                f"Request to OpenRouter failed: {str(e) or type(e).__name__}",
            ) from e

    @staticmethod
    def _decode_error(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {"message": "Unknown error"}
        if not isinstance(payload, dict):
            return {"message": "Unknown error", "body": payload}
        return payload

    @staticmethod
    def _structure_error(details: Any = None) -> ChatClientError:
        return ChatClientError(
            ChatErrorKind.RESPONSE_STRUCTURE,
            "Invalid response structure from OpenRouter",
            details=details,
        )

    @classmethod
    def _parse_response(
        cls,
        response: httpx.Response,
        validator: ValidatorModel | None,
    ) -> ChatResponse:
        try:
            data = response.json()
        except ValueError as e:
            raise cls._structure_error() from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise cls._structure_error(data)

        choice = choices[0]
        if not isinstance(choice, dict):
            raise cls._structure_error(data)

        message = choice.get("message")
        if message is None:
            message = {}
        usage = data.get("usage")
        if usage is None:
            usage = {}
        if not isinstance(message, dict) or not isinstance(usage, dict):
            raise cls._structure_error(data)

        content = message.get("content")
        if content is None:
            content = ""
        if not isinstance(content, str):
            raise cls._structure_error(data)

        parsed_content = None
        if validator is not None and content:
            try:
                parsed_content = validator.model_validate(json.loads(content))
            except (ValueError, ValidationError) as e:
                raise ChatClientError(
                    ChatErrorKind.VALIDATION,
                    "Response content does not match expected schema",
                    details={"content": content, "error": str(e)},
                ) from e

        try:
            return ChatResponse(
                id=data.get("id") or "",
                model=data.get("model") or "",
                content=content,
                parsed_content=parsed_content,
                usage=Usage(
                    prompt_tokens=usage.get("prompt_tokens") or 0,
                    completion_tokens=usage.get("completion_tokens") or 0,
                    total_tokens=usage.get("total_tokens") or 0,
                ),
                finish_reason=choice.get("finish_reason") or "unknown",
            )
        except ValidationError as e:
            raise cls._structure_error(data) from e

    async def chat(
        self,
        messages: Sequence[ChatMessage | dict[str, str]],
        options: ChatOptions | None = None,
    ) -> ChatResponse:
        """Run a chat completion against OpenRouter."""
        validated = _validate_messages(messages)
        headers, body = self.build_request(validated, options)

        logger.debug(f"Starting chat_completion with model {body['model']}")
        response = await self._execute(headers, body)

        if not response.is_success:
            error = error_for_status(response.status_code, self._decode_error(response))
            logger.error(
                f"chat_completion failed with HTTP {response.status_code}: "
                f"{error.message}"
            )
            raise error

        validator = None
        if options is not None and options.response_format is not None:
            validator = options.response_format.validator
        result = self._parse_response(response, validator)
        logger.debug(
            f"Completed chat_completion ({result.usage.total_tokens} tokens, "
            f"finish_reason={result.finish_reason})"
        )
        return result
