"""
Session Progress Evaluator.

Scores a just-finished practice session against the learner's prior
history and recommends the difficulty tier for the next session.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from src.adaptive.proficiency_estimator import ProficiencyEstimator, accuracy_of
from src.core.exceptions import InputError
from src.core.models import Attempt, DifficultyTier

STEP_UP_ACCURACY = 0.8
STEP_DOWN_ACCURACY = 0.5


class FeedbackLevel(str, Enum):
    OUTSTANDING = "outstanding"
    ON_TRACK = "on_track"
    NEEDS_PRACTICE = "needs_practice"

    @classmethod
    def from_accuracy(cls, accuracy: float) -> FeedbackLevel:
        if accuracy >= 0.9:
            return cls.OUTSTANDING
        if accuracy >= 0.7:
            return cls.ON_TRACK
        return cls.NEEDS_PRACTICE

    @property
    def message(self) -> str:
        return {
            FeedbackLevel.OUTSTANDING: "Outstanding performance, ready for harder questions.",
            FeedbackLevel.ON_TRACK: "Good progress, keep practising at this level.",
            FeedbackLevel.NEEDS_PRACTICE: "These areas need additional practice before moving on.",
        }[self]


@dataclass(frozen=True)
class SessionProgress:
    """Outcome of one practice session."""

    accuracy_rate: float
    mastery_level: float  # 1-10
    recommended_tier: DifficultyTier
    feedback: FeedbackLevel
    questions_answered: int


class ProgressEvaluator:
    """Evaluate session results and recommend the next tier."""

    def __init__(self, estimator: ProficiencyEstimator | None = None):
        self.estimator = estimator or ProficiencyEstimator()

    @staticmethod
    def recommend_tier(accuracy: float, current_tier: DifficultyTier) -> DifficultyTier:
        """One tier up at 80%+, one tier down below 50%."""
        if accuracy >= STEP_UP_ACCURACY:
            return current_tier.step(1)
        if accuracy < STEP_DOWN_ACCURACY:
            return current_tier.step(-1)
        return current_tier

    def evaluate(
        self,
        session_attempts: Sequence[Attempt],
        prior_history: Sequence[Attempt] = (),
        current_tier: DifficultyTier = DifficultyTier.EASY,
    ) -> SessionProgress:
        """
        Evaluate a practice session.

        Args:
            session_attempts: Attempts from the session, newest first
            prior_history: Earlier attempts in the topic, newest first
            current_tier: Tier the session was practised at

        Returns:
            SessionProgress

        Raises:
            InputError: The session has no attempts
        """
        if not session_attempts:
            raise InputError("Cannot evaluate a session with no attempts")

        accuracy = accuracy_of(session_attempts)
        estimate = self.estimator.estimate(list(session_attempts) + list(prior_history))

        return SessionProgress(
            accuracy_rate=accuracy,
            mastery_level=estimate.level,
            recommended_tier=self.recommend_tier(accuracy, current_tier),
            feedback=FeedbackLevel.from_accuracy(accuracy),
            questions_answered=len(session_attempts),
        )
