"""
Collaborator interfaces consumed by the adaptive engine.

The surrounding application owns storage; the engine only reads through
these two protocols. In-memory implementations back the CLI and tests.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Iterable
from typing import Protocol

from src.core.models import Attempt, CandidateItem, DifficultyTier


class AttemptHistoryProvider(Protocol):
    """Read-only access to a learner's past attempts."""

    async def get_attempt_history(
        self,
        learner_id: str,
        topic: str,
        window_size: int | None,
    ) -> list[Attempt]:
        """Return up to window_size attempts for the topic, newest first (all when None)."""
        ...


class CandidatePoolProvider(Protocol):
    """Supplies eligible practice items for a topic."""

    async def get_candidate_pool(
        self,
        topic: str,
        difficulty_tiers: Collection[DifficultyTier],
        pool_size: int,
    ) -> list[CandidateItem]:
        """Return up to pool_size active items in the given tiers."""
        ...


class InMemoryAttemptHistory:
    """Attempt history held in memory, keyed by learner and topic."""

    def __init__(self, attempts: dict[str, Iterable[Attempt]] | None = None):
        """
        Args:
            attempts: Mapping of learner_id to that learner's attempts (any order)
        """
        self._attempts: dict[str, list[Attempt]] = defaultdict(list)
        for learner_id, learner_attempts in (attempts or {}).items():
            self._attempts[learner_id].extend(learner_attempts)

    def record(self, learner_id: str, attempt: Attempt) -> None:
        self._attempts[learner_id].append(attempt)

    async def get_attempt_history(
        self,
        learner_id: str,
        topic: str,
        window_size: int | None,
    ) -> list[Attempt]:
        topic_attempts = [a for a in self._attempts.get(learner_id, []) if a.topic == topic]
        topic_attempts.sort(key=lambda a: a.occurred_at, reverse=True)
        return topic_attempts[:window_size]


class InMemoryCandidatePool:
    """Candidate items held in memory, returned in insertion order."""

    def __init__(self, items: Iterable[CandidateItem] | None = None):
        self._items: list[CandidateItem] = list(items or [])

    def add(self, item: CandidateItem) -> None:
        self._items.append(item)

    async def get_candidate_pool(
        self,
        topic: str,
        difficulty_tiers: Collection[DifficultyTier],
        pool_size: int,
    ) -> list[CandidateItem]:
        tiers = set(difficulty_tiers)
        matching = [
            item for item in self._items
            if item.topic == topic and item.difficulty_tier in tiers
        ]
        return matching[:pool_size]
