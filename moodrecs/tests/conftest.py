"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from moodrecs.core.contracts import (
    ContentItem,
    ContentType,
    Focus,
    ScoringContext,
    UserPreferences,
    UserState,
)

FIXED_TODAY = date(2026, 6, 1)


@pytest.fixture(scope="session")
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def make_item():
    """Factory for ContentItems with sensible defaults."""

    def _make(item_id: str = "item-1", **overrides) -> ContentItem:
        data = {
            "id": item_id,
            "content_type": ContentType.WATCH,
            "title": f"Title {item_id}",
            "source": "test",
            "tags": ("light", "fun"),
            "genres": ("comedy",),
            "intensity": 0.2,
            "cognitive_load": 0.3,
            "novelty": 0.3,
            "duration_min": 90,
            "popularity": 0.0,
            "rating": None,
        }
        data.update(overrides)
        return ContentItem(**data)

    return _make


@pytest.fixture
def make_context():
    """Factory for ScoringContexts."""

    def _make(**overrides) -> ScoringContext:
        data = {
            "state": UserState.CALM_SEEKING,
            "focus": Focus.WATCH,
            "time_available_min": 90,
            "energy_level": 2,
            "user_prefs": UserPreferences(),
            "no_heavy": False,
        }
        data.update(overrides)
        return ScoringContext(**data)

    return _make
