"""Shared fixtures for core tests."""

from uuid import UUID, uuid4

import pytest
from fakes import FakeFlashcardStore


@pytest.fixture
def store() -> FakeFlashcardStore:
    return FakeFlashcardStore()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()
