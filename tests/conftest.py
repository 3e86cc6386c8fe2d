"""Pytest fixtures for Attachment State tests."""

import random

import pytest
from attachment_state import (
    DialogueEngine,
    EngineConfig,
    InteractionHistoryStore,
    InteractionRecord,
)


@pytest.fixture
def rng():
    """Seeded random source for deterministic corruption."""
    return random.Random(1234)


@pytest.fixture
def engine(rng):
    """Create an in-memory engine for testing."""
    engine = DialogueEngine(EngineConfig(db_path=":memory:"), rng=rng)
    yield engine
    engine.close()


@pytest.fixture
def store():
    """Create an in-memory history store."""
    with InteractionHistoryStore(":memory:") as store:
        yield store


@pytest.fixture
def make_history():
    """Build an interaction history from a list of response tokens."""

    def _make(responses, entity_id="memory_orb_1", text="Remember this moment?"):
        return [
            InteractionRecord(
                entity_id=entity_id,
                dialogue_text=text,
                user_response=response,
                timestamp=float(i),
                attachment_level_at_time=0.0,
            )
            for i, response in enumerate(responses)
        ]

    return _make
