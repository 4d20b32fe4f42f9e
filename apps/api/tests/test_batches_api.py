"""Tests for the flashcard batch endpoints."""

from typing import Any
from uuid import UUID, uuid4

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from flashgen_core.model_adapters import ChatClientError, ChatErrorKind

from app.db import models

INPUT_TEXT = "The French Revolution began in 1789 and reshaped European politics. " * 20


def headers(user_id: UUID) -> dict[str, str]:
    return {"X-User-Id": str(user_id)}


def decision(index: int, action: str, **overrides: Any) -> dict[str, Any]:
    body = {
        "index": index,
        "action": action,
        "front_text": f"What is concept number {index}?",
        "back_text": f"Concept number {index} is explained here.",
    }
    body.update(overrides)
    return body


async def generate(client: httpx.AsyncClient, user_id: UUID) -> dict[str, Any]:
    response = await client.post(
        "/api/v1/flashcards/batch",
        json={"input_text": INPUT_TEXT},
        headers=headers(user_id),
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_ready(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/v1/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready"}


class TestGenerateBatch:
    """Tests for POST /flashcards/batch."""

    @pytest.mark.asyncio
    async def test_generates_and_records_batch(
        self, client: httpx.AsyncClient, user_id: UUID, db: AsyncSession
    ) -> None:
        body = await generate(client, user_id)

        assert body["total_cards_generated"] == 3
        assert [card["index"] for card in body["generated_cards"]] == [0, 1, 2]
        assert body["input_text_length"] == len(INPUT_TEXT.strip())
        assert body["model_used"] == "openai/gpt-4o-mini"
        assert body["time_taken_ms"] >= 0

        batch = await db.get(models.AIGenerationBatch, UUID(body["batch_id"]))
        assert batch is not None
        assert batch.user_id == user_id
        assert (batch.cards_accepted, batch.cards_rejected, batch.cards_edited) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_missing_user_header(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/v1/flashcards/batch", json={"input_text": INPUT_TEXT}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_malformed_user_header(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/api/v1/flashcards/batch",
            json={"input_text": INPUT_TEXT},
            headers={"X-User-Id": "not-a-uuid"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_short_input(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        response = await client.post(
            "/api/v1/flashcards/batch",
            json={"input_text": "too short"},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["message"] == "Validation failed"
        assert body["details"][0]["field"] == "input_text"
        assert body["details"][0]["received_length"] == 9

    @pytest.mark.asyncio
    async def test_padded_input_counts_trimmed_length(
        self, client: httpx.AsyncClient, user_id: UUID
    ) -> None:
        response = await client.post(
            "/api/v1/flashcards/batch",
            json={"input_text": " " * 500 + "x" * 900},
            headers=headers(user_id),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_json(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        response = await client.post(
            "/api/v1/flashcards/batch",
            content=b"{not json",
            headers={**headers(user_id), "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_generation_failure(
        self, client: httpx.AsyncClient, user_id: UUID, chat_adapter, db: AsyncSession
    ) -> None:
        chat_adapter.error = ChatClientError(ChatErrorKind.RATE_LIMIT, "Rate limit exceeded")

        response = await client.post(
            "/api/v1/flashcards/batch",
            json={"input_text": INPUT_TEXT},
            headers=headers(user_id),
        )

        assert response.status_code == 502
        assert response.json() == {
            "error": "GENERATION_FAILED",
            "message": "Rate limit exceeded. Please try again in a few moments.",
        }


class TestReviewBatch:
    """Tests for POST /flashcards/batch/{batch_id}/review."""

    @pytest.mark.asyncio
    async def test_accept_reject_edit(
        self, client: httpx.AsyncClient, user_id: UUID, db: AsyncSession
    ) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={
                "decisions": [
                    decision(0, "accept"),
                    decision(1, "reject"),
                    decision(2, "edit", front_text="  Rewritten question two?  "),
                ]
            },
            headers=headers(user_id),
        )

        assert response.status_code == 201, response.text
        body = response.json()
        assert (body["cards_accepted"], body["cards_rejected"], body["cards_edited"]) == (1, 1, 1)
        assert len(body["created_flashcards"]) == 2
        edited = body["created_flashcards"][1]
        assert edited["front_text"] == "Rewritten question two?"
        assert edited["was_edited"] is True
        assert edited["generation_batch_id"] == batch["batch_id"]
        assert "user_id" not in edited

        stored = await db.get(models.AIGenerationBatch, UUID(batch["batch_id"]))
        assert (stored.cards_accepted, stored.cards_rejected, stored.cards_edited) == (1, 1, 1)

    @pytest.mark.asyncio
    async def test_second_review_conflicts(
        self, client: httpx.AsyncClient, user_id: UUID
    ) -> None:
        batch = await generate(client, user_id)
        url = f"/api/v1/flashcards/batch/{batch['batch_id']}/review"

        first = await client.post(
            url, json={"decisions": [decision(0, "accept")]}, headers=headers(user_id)
        )
        second = await client.post(
            url, json={"decisions": [decision(1, "accept")]}, headers=headers(user_id)
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"] == "BATCH_ALREADY_REVIEWED"

    @pytest.mark.asyncio
    async def test_invalid_batch_id(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        response = await client.post(
            "/api/v1/flashcards/batch/not-a-uuid/review",
            json={"decisions": [decision(0, "accept")]},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "VALIDATION_ERROR",
            "message": "Invalid batch ID format. Must be a valid UUID.",
        }

    @pytest.mark.asyncio
    async def test_unknown_batch(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        response = await client.post(
            f"/api/v1/flashcards/batch/{uuid4()}/review",
            json={"decisions": [decision(0, "accept")]},
            headers=headers(user_id),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "BATCH_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_batch_of_another_user(
        self, client: httpx.AsyncClient, user_id: UUID
    ) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(0, "accept")]},
            headers=headers(uuid4()),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_index_out_of_range(
        self, client: httpx.AsyncClient, user_id: UUID
    ) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(3, "accept")]},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Index 3 is out of bounds. Maximum allowed index is 2"
        )

    @pytest.mark.asyncio
    async def test_duplicate_indices(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(0, "accept"), decision(0, "reject")]},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid review decisions"
        assert body["details"][0]["field"] == "decisions"
        assert body["details"][0]["message"] == "Duplicate indices found in decisions array"

    @pytest.mark.asyncio
    async def test_empty_decisions(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": []},
            headers=headers(user_id),
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_short_front_text(self, client: httpx.AsyncClient, user_id: UUID) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(0, "edit", front_text="Why?")]},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        detail = response.json()["details"][0]
        assert detail["field"] == "decisions.0.front_text"
        assert detail["received_length"] == 4

    @pytest.mark.asyncio
    async def test_flashcard_limit(
        self, client: httpx.AsyncClient, user_id: UUID, db: AsyncSession
    ) -> None:
        db.add_all(
            models.Flashcard(
                user_id=user_id,
                front_text=f"Existing question {i}",
                back_text=f"Existing answer {i}",
                is_ai_generated=False,
                was_edited=False,
            )
            for i in range(499)
        )
        await db.commit()
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(0, "accept"), decision(1, "accept")]},
            headers=headers(user_id),
        )

        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "FLASHCARD_LIMIT_EXCEEDED"
        assert body["current_count"] == 499
        assert body["limit"] == 500
        assert body["suggestion"] == (
            "Delete some existing flashcards or reject more generated cards"
        )

    @pytest.mark.asyncio
    async def test_padded_short_text_rejected(
        self, client: httpx.AsyncClient, user_id: UUID
    ) -> None:
        """Length bounds apply to the stripped text, not the padded raw value."""
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(0, "edit", back_text="     Short.     ")]},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "decisions.0.back_text"

    @pytest.mark.asyncio
    async def test_length_reported_only_for_text_fields(
        self, client: httpx.AsyncClient, user_id: UUID
    ) -> None:
        batch = await generate(client, user_id)

        response = await client.post(
            f"/api/v1/flashcards/batch/{batch['batch_id']}/review",
            json={"decisions": [decision(0, "approve")]},
            headers=headers(user_id),
        )

        assert response.status_code == 400
        detail = response.json()["details"][0]
        assert detail["field"] == "decisions.0.action"
        assert "received_length" not in detail
