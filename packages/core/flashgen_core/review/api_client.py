"""HTTP client for the flashcard batch endpoints."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

import httpx
from pydantic import BaseModel, ValidationError

from flashgen_core.schemas.cards import (
    ApiError,
    GenerateFlashcardsResponse,
    ReviewDecision,
    ReviewFlashcardsResponse,
)
from flashgen_core.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 90.0  # seconds; generation can take a while
USER_ID_HEADER = "X-User-Id"


class ApiRequestError(Exception):
    """A batch endpoint call failed; ``error`` is the decoded payload."""

    def __init__(self, error: ApiError, status_code: int | None = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


class FlashcardApiClient:
    """Calls the generation and review endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        user_id: UUID | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.timeout = timeout
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if self.user_id is None:
            return {}
        return {USER_ID_HEADER: str(self.user_id)}

    async def _post(self, path: str, body: dict[str, Any], model: type[BaseModel]) -> Any:
        try:
            response = await self.client.post(path, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"Request to {path} failed: {e}")
            raise ApiRequestError(
                ApiError(error="NETWORK_ERROR", message="Could not reach the server")
            ) from e

        if not response.is_success:
            try:
                error = ApiError.model_validate(response.json())
            except (ValueError, ValidationError):
                error = ApiError(
                    error="HTTP_ERROR",
                    message=f"Request failed with status {response.status_code}",
                )
            raise ApiRequestError(error, status_code=response.status_code)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ApiRequestError(
                ApiError(error="INVALID_RESPONSE", message="Unexpected response from server"),
                status_code=response.status_code,
            ) from e

    async def generate_flashcards(self, input_text: str) -> GenerateFlashcardsResponse:
        """POST the trimmed text for generation."""
        return await self._post(
            "/api/v1/flashcards/batch",
            {"input_text": input_text.strip()},
            GenerateFlashcardsResponse,
        )

    async def submit_review(
        self,
        batch_id: UUID,
        decisions: Sequence[ReviewDecision],
    ) -> ReviewFlashcardsResponse:
        """POST review decisions for a batch."""
        return await self._post(
            f"/api/v1/flashcards/batch/{batch_id}/review",
            {"decisions": [d.model_dump(mode="json") for d in decisions]},
            ReviewFlashcardsResponse,
        )
