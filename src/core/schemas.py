"""
Fixture Schemas.

Pydantic records for loading attempt history and candidate items from JSON,
as used by the CLI and the in-memory collaborators.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from src.core.collaborators import InMemoryAttemptHistory, InMemoryCandidatePool
from src.core.models import Attempt, CandidateItem, DifficultyTier


class AttemptRecord(BaseModel):
    """One recorded answer."""

    learner_id: str = Field(..., description="Learner identifier")
    topic: str = Field(..., description="Topic (test category)")
    difficulty: DifficultyTier = Field(..., description="EASY, MEDIUM or HARD")
    correct: bool
    time_spent_ms: float = Field(0, ge=0, description="Time spent answering")
    occurred_at: datetime
    item_id: str | None = None
    session_id: str | None = Field(None, description="Quiz/session grouping")

    def to_attempt(self) -> Attempt:
        return Attempt(
            topic=self.topic,
            difficulty_tier=self.difficulty,
            correct=self.correct,
            time_spent_ms=self.time_spent_ms,
            occurred_at=self.occurred_at,
            item_id=self.item_id,
            session_id=self.session_id,
        )


class ItemRecord(BaseModel):
    """One practice item."""

    id: str
    topic: str
    difficulty: DifficultyTier
    tags: list[str] = Field(default_factory=list, description="Eligibility tags")
    is_active: bool = True

    def to_item(self) -> CandidateItem:
        return CandidateItem(
            id=self.id,
            topic=self.topic,
            difficulty_tier=self.difficulty,
            eligibility_tags=frozenset(self.tags),
        )


class EngineFixture(BaseModel):
    """Attempts and items for an offline engine run."""

    attempts: list[AttemptRecord] = Field(default_factory=list)
    items: list[ItemRecord] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | Path) -> EngineFixture:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def history_provider(self) -> InMemoryAttemptHistory:
        grouped: dict[str, list[Attempt]] = {}
        for record in self.attempts:
            grouped.setdefault(record.learner_id, []).append(record.to_attempt())
        return InMemoryAttemptHistory(grouped)

    def pool_provider(self) -> InMemoryCandidatePool:
        """Only active items are offered to the engine."""
        return InMemoryCandidatePool(r.to_item() for r in self.items if r.is_active)
