"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings  # noqa: E402
from src.core.models import Attempt, CandidateItem, DifficultyTier  # noqa: E402

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (engine wired to in-memory collaborators)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_attempt(
    correct: bool = True,
    tier: DifficultyTier = DifficultyTier.MEDIUM,
    time_spent_ms: float = 30_000,
    topic: str = "ARITHMETIC_REASONING",
    minutes_ago: int = 0,
    item_id: str | None = None,
    session_id: str | None = "session-1",
) -> Attempt:
    """Build an attempt; minutes_ago orders attempts in time."""
    return Attempt(
        topic=topic,
        difficulty_tier=tier,
        correct=correct,
        time_spent_ms=time_spent_ms,
        occurred_at=BASE_TIME - timedelta(minutes=minutes_ago),
        item_id=item_id,
        session_id=session_id,
    )


def make_history(outcomes: list[bool], **kwargs) -> list[Attempt]:
    """Newest-first history from a list of outcomes."""
    return [make_attempt(correct=c, minutes_ago=i, **kwargs) for i, c in enumerate(outcomes)]


def make_item(
    item_id: str,
    tier: DifficultyTier = DifficultyTier.EASY,
    topic: str = "ARITHMETIC_REASONING",
    tags: tuple[str, ...] = (),
) -> CandidateItem:
    return CandidateItem(id=item_id, topic=topic, difficulty_tier=tier, eligibility_tags=frozenset(tags))


@pytest.fixture
def attempt_factory():
    return make_attempt


@pytest.fixture
def history_factory():
    return make_history


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None, lookahead_strategy="deterministic")


@pytest.fixture
def sample_attempt():
    """Provide a sample attempt for testing."""
    return make_attempt(item_id="q-001")


@pytest.fixture
def sample_items():
    """Provide a small mixed-tier pool."""
    return [
        make_item("easy-1", DifficultyTier.EASY),
        make_item("easy-2", DifficultyTier.EASY),
        make_item("medium-1", DifficultyTier.MEDIUM),
        make_item("medium-2", DifficultyTier.MEDIUM),
        make_item("hard-1", DifficultyTier.HARD),
    ]
