"""Shared fixtures for unit tests."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from glasses_context.artifact_store import ArtifactCategory, ArtifactStore


class FakeReasoningClient:
    """Stands in for ReasoningClient; records prompts, returns canned text."""

    def __init__(self, answer: str | None = "An answer.", description: str = "A photo."):
        self.complete = AsyncMock(return_value=answer)
        self.describe_image = AsyncMock(return_value=description)
        self.ensure_ready = MagicMock(return_value=None)

    @property
    def last_prompt(self) -> str:
        content = self.complete.await_args.args[0]
        return content[0]["text"]


@pytest.fixture
def store(tmp_path):
    """ArtifactStore rooted in a temporary directory."""
    return ArtifactStore(tmp_path / "data")


@pytest.fixture
def fake_client():
    return FakeReasoningClient()


@pytest.fixture
def test_logger():
    """Isolated logger so tests don't depend on global logging state."""
    logger = logging.getLogger("glasses_context.tests")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def populated_store(store):
    """Store with two transcripts and one described image."""
    store.write_text(ArtifactCategory.TRANSCRIPT, "Meeting about the budget.", "2025-01-01-09-00-00")
    store.write_text(ArtifactCategory.TRANSCRIPT, "Lunch with Sam at noon.", "2025-01-01-12-00-00")
    store.write_text(ArtifactCategory.IMAGE_DESCRIPTION, "A red bicycle by a fence.", "2025-01-01-00-00-00")
    store.write_image("2025-01-01-00-00-00", b"\x89PNG fake bytes", "image/png")
    return store


@pytest.fixture
def make_fake_client():
    """Factory for FakeReasoningClient with a specific canned answer."""
    return FakeReasoningClient
