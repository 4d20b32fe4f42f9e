"""Chat-completion request and response schemas."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

T = TypeVar("T", bound=BaseModel)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.0-flash-exp:free"
DEFAULT_TIMEOUT = 30.0  # seconds

MAX_MESSAGE_LENGTH = 10000
MAX_MESSAGES = 50

# ResponseFormat has a field named "type", which hides the builtin in its body
ValidatorModel = type[BaseModel]


class ChatClientConfig(BaseModel):
    """Immutable configuration for a chat-completion client."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., min_length=1, description="Bearer token")
    base_url: HttpUrl = Field(DEFAULT_BASE_URL, description="API root")
    model: str = Field(DEFAULT_MODEL, min_length=1, description="Default model")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-attempt timeout")
    max_retries: int = Field(3, ge=0, le=5, description="Retries after first try")
    site_name: str | None = Field(None, description="Sent as X-Title")
    site_url: HttpUrl | None = Field(None, description="Sent as HTTP-Referer")

    @property
    def completions_url(self) -> str:
        return f"{str(self.base_url).rstrip('/')}/chat/completions"


class ChatMessage(BaseModel):
    """A single message in a chat conversation."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str = Field(..., max_length=MAX_MESSAGE_LENGTH)


class ResponseFormat(BaseModel):
    """Structured-output descriptor.

    Only ``type`` and the ``json_schema`` block travel on the wire. The
    optional ``validator`` model is applied locally to the decoded content.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["json_schema"] = "json_schema"
    name: str
    strict: bool = True
    json_schema: dict[str, Any]
    validator: ValidatorModel | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize the descriptor for the request body."""
        return {
            "type": self.type,
            "json_schema": {
                "name": self.name,
                "strict": self.strict,
                "schema": self.json_schema,
            },
        }


class ChatOptions(BaseModel):
    """Optional per-call sampling parameters.

    Fields left unset are never sent to the API.
    """

    model_config = ConfigDict(frozen=True)

    model: str | None = None
    temperature: float | None = Field(None, ge=0, le=2)
    max_tokens: int | None = Field(None, gt=0)
    top_p: float | None = Field(None, ge=0, le=1)
    frequency_penalty: float | None = Field(None, ge=-2, le=2)
    presence_penalty: float | None = Field(None, ge=-2, le=2)
    stop: list[str] | None = None
    response_format: ResponseFormat | None = None


class Usage(BaseModel):
    """Token accounting reported by the API."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel, Generic[T]):
    """Normalized chat-completion result."""

    id: str
    model: str
    content: str
    parsed_content: T | None = None
    usage: Usage = Field(default_factory=Usage)
    finish_reason: str = "unknown"
