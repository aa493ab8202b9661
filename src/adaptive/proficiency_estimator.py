"""
Proficiency Estimator.

Converts a learner's recent attempts in one topic into a 1-10 proficiency
level built from four signals:
- Accuracy (max 4 points)
- Response speed (max 3 points, zero beyond a 3 minute average)
- Consistency across attempt groups (max 2 points)
- Accuracy on each difficulty tier handled (max 1 point)

A learner with no history gets the neutral level of 5. That value anchors
the very first sequence a new learner receives.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, date, datetime

from src.core.models import (
    Attempt,
    DifficultyTier,
    ProficiencyEstimate,
    clamp_level,
)

NEUTRAL_PROFICIENCY = 5.0
DEFAULT_WINDOW_SIZE = 20

# Component caps
ACCURACY_WEIGHT = 4.0
SPEED_WEIGHT = 3.0
CONSISTENCY_WEIGHT = 2.0

MIN_GROUPS_FOR_CONSISTENCY = 3
NEUTRAL_CONSISTENCY = 1.0
VELOCITY_GROUPS = 5


def accuracy_of(attempts: Sequence[Attempt]) -> float:
    """Fraction of attempts answered correctly (0 when empty)."""
    if not attempts:
        return 0.0
    return sum(1 for a in attempts if a.correct) / len(attempts)


def _group_key(attempt: Attempt) -> str | date:
    if attempt.session_id:
        return attempt.session_id
    return attempt.occurred_at.date()


def group_attempts(attempts: Sequence[Attempt]) -> list[list[Attempt]]:
    """
    Group attempts by session, falling back to calendar day.

    Groups keep the order in which they first appear, so a newest-first
    input yields newest-first groups.
    """
    groups: dict[str | date, list[Attempt]] = {}
    for attempt in attempts:
        groups.setdefault(_group_key(attempt), []).append(attempt)
    return list(groups.values())


class ProficiencyEstimator:
    """
    Estimate topic proficiency from attempt history.

    Stateless: the same window always yields the same level.
    """

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        neutral_level: float = NEUTRAL_PROFICIENCY,
    ):
        """
        Args:
            window_size: Most recent attempts considered (default 20)
            neutral_level: Level for an empty history (default 5)
        """
        self.window_size = window_size
        self.neutral_level = clamp_level(neutral_level)

    def estimate(
        self,
        history: Sequence[Attempt],
        topic: str | None = None,
        now: datetime | None = None,
    ) -> ProficiencyEstimate:
        """
        Estimate proficiency from attempts ordered newest first.

        Args:
            history: Attempts for one topic, newest first
            topic: Topic label (taken from the attempts when omitted)
            now: Timestamp for computed_at (defaults to UTC now)

        Returns:
            ProficiencyEstimate with level in [1, 10]
        """
        computed_at = now or datetime.now(UTC)
        window = list(history[: self.window_size])
        if topic is None and window:
            topic = window[0].topic

        if not window:
            return ProficiencyEstimate(
                topic=topic,
                level=self.neutral_level,
                sample_size=0,
                computed_at=computed_at,
                components={
                    "accuracy": 0.0,
                    "speed": 0.0,
                    "consistency": NEUTRAL_CONSISTENCY,
                    "difficulty_handled": 0.0,
                },
            )

        accuracy = accuracy_of(window)
        average_seconds = sum(a.time_spent_seconds for a in window) / len(window)
        groups = group_attempts(window)
        tier_accuracy = self.tier_accuracy(window)

        components = {
            "accuracy": accuracy * ACCURACY_WEIGHT,
            "speed": self.speed_component(average_seconds),
            "consistency": self.consistency_component(groups),
            "difficulty_handled": sum(tier_accuracy.values()) / len(tier_accuracy),
        }
        level = clamp_level(sum(components.values()))

        return ProficiencyEstimate(
            topic=topic,
            level=level,
            sample_size=len(window),
            computed_at=computed_at,
            accuracy=accuracy,
            average_time_seconds=average_seconds,
            learning_velocity=self.learning_velocity(groups),
            tier_accuracy=tier_accuracy,
            components=components,
        )

    @staticmethod
    def speed_component(average_seconds: float) -> float:
        """3 points for instant answers, falling to 0 at a 3 minute average."""
        return max(0.0, SPEED_WEIGHT - average_seconds / 60.0)

    @staticmethod
    def consistency_component(groups: Sequence[Sequence[Attempt]]) -> float:
        """
        Reward stable accuracy across attempt groups.

        Formula: max(0, 2 - 10 × variance(group accuracy))

        Fewer than 3 groups is not enough evidence, so the neutral
        score of 1 is used.
        """
        if len(groups) < MIN_GROUPS_FOR_CONSISTENCY:
            return NEUTRAL_CONSISTENCY

        accuracies = [accuracy_of(g) for g in groups]
        mean = sum(accuracies) / len(accuracies)
        variance = sum((acc - mean) ** 2 for acc in accuracies) / len(accuracies)
        return max(0.0, CONSISTENCY_WEIGHT - variance * 10)

    @staticmethod
    def tier_accuracy(attempts: Sequence[Attempt]) -> dict[str, float]:
        """Local accuracy per tier; tiers without samples count as 0."""
        result = {}
        for tier in DifficultyTier.ordered():
            tier_attempts = [a for a in attempts if a.difficulty_tier == tier]
            result[tier.value] = accuracy_of(tier_attempts)
        return result

    @staticmethod
    def learning_velocity(groups: Sequence[Sequence[Attempt]]) -> float:
        """
        Accuracy of the newest groups minus accuracy of the oldest.

        Positive = improving, negative = declining.
        """
        if len(groups) < 2:
            return 0.0
        recent = [a for g in groups[:VELOCITY_GROUPS] for a in g]
        older = [a for g in groups[-VELOCITY_GROUPS:] for a in g]
        return accuracy_of(recent) - accuracy_of(older)
