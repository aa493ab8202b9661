"""
Learning Engine - entry points for adaptive sequencing and topic planning.

Wires the estimator, scorer, adjuster, sequence builder, prioritizer and
path planner around the two injected collaborators.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from loguru import logger

from config import Settings, get_settings
from src.adaptive.category_prioritizer import CategoryPrioritizer
from src.adaptive.difficulty_adjuster import (
    DifficultyAdjuster,
    OutcomePredictor,
    build_predictor,
)
from src.adaptive.item_scorer import ItemScorer
from src.adaptive.learning_path import LearningPath, LearningPathPlanner
from src.adaptive.proficiency_estimator import ProficiencyEstimator
from src.adaptive.progress_evaluator import ProgressEvaluator, SessionProgress
from src.adaptive.sequence_builder import SequenceBuilder
from src.core.collaborators import AttemptHistoryProvider, CandidatePoolProvider
from src.core.exceptions import CollaboratorFailure, InputError
from src.core.models import Attempt, DifficultyTier, SequenceResult, TopicPriority

PRIORITIZE_FAILURE_MESSAGE = "Failed to prioritize topics"


class LearningEngine:
    """
    Main orchestration layer.

    Usage:
        engine = LearningEngine(history_provider, pool_provider)
        result = await engine.build_sequence("learner-1", "WORD_KNOWLEDGE", 10)
        plan = await engine.prioritize_topics("learner-1", ["WORD_KNOWLEDGE", "AUTO_SHOP"])
    """

    def __init__(
        self,
        history_provider: AttemptHistoryProvider,
        pool_provider: CandidatePoolProvider,
        settings: Settings | None = None,
        predictor: OutcomePredictor | None = None,
    ):
        """
        Args:
            history_provider: Source of attempt history
            pool_provider: Source of candidate items
            settings: Engine settings (defaults to cached environment settings)
            predictor: Look-ahead predictor overriding the configured strategy
        """
        self.settings = settings or get_settings()
        self.history_provider = history_provider
        self.known_topics = self.settings.get_known_topics()

        self.estimator = ProficiencyEstimator(
            window_size=self.settings.history_window_size,
            neutral_level=self.settings.neutral_proficiency,
        )
        self.sequence_builder = SequenceBuilder(
            history_provider=history_provider,
            pool_provider=pool_provider,
            estimator=self.estimator,
            scorer=ItemScorer(target_window=self.settings.target_window),
            adjuster=DifficultyAdjuster(
                correct_streak_threshold=self.settings.correct_streak_threshold,
                incorrect_streak_threshold=self.settings.incorrect_streak_threshold,
            ),
            predictor=predictor or build_predictor(
                self.settings.lookahead_strategy, self.settings.lookahead_seed
            ),
            known_topics=self.known_topics,
            pool_size_multiplier=self.settings.pool_size_multiplier,
        )
        self.prioritizer = CategoryPrioritizer(
            estimator=self.estimator,
            needs_work_accuracy=self.settings.needs_work_accuracy,
        )
        self.path_planner = LearningPathPlanner(self.settings.get_beginner_priority_topics())
        self.progress_evaluator = ProgressEvaluator(self.estimator)
        logger.debug(f"Adaptive engine configured: {self.settings.get_adaptive_config()}")

    async def build_sequence(
        self,
        learner_id: str,
        topic: str,
        max_items: int,
        adaptive_difficulty: bool = True,
        audience: str | None = None,
    ) -> SequenceResult:
        """Generate an adaptive practice sequence for one topic."""
        return await self.sequence_builder.build(
            learner_id, topic, max_items, adaptive_difficulty, audience=audience
        )

    async def prioritize_topics(self, learner_id: str, topics: Iterable[str]) -> list[TopicPriority]:
        """
        Rank topics for a learner.

        Accuracy, attempt counts and needs_work cover the planning window
        (full history by default); proficiency still uses the estimator window.

        Raises:
            InputError: A topic is not known to the engine
            CollaboratorFailure: A history fetch failed
        """
        topics = list(dict.fromkeys(topics))
        unknown = [t for t in topics if t not in self.known_topics]
        if unknown:
            raise InputError(f"Unknown topics: {', '.join(unknown)}")

        histories = await self._fetch_histories(learner_id, topics)
        priorities = self.prioritizer.prioritize(topics, histories)

        logger.info(
            f"Prioritized {len(priorities)} topics for learner {learner_id}: "
            f"{sum(1 for p in priorities if p.needs_work)} need work"
        )
        return priorities

    async def plan_learning_path(
        self,
        learner_id: str,
        topics: Sequence[str] | None = None,
    ) -> LearningPath:
        """Build a multi-topic learning path (all known topics by default)."""
        priorities = await self.prioritize_topics(learner_id, topics or self.known_topics)
        path = self.path_planner.plan(priorities)
        logger.info(
            f"Planned {path.skill_level.value} learning path for learner {learner_id}: "
            f"{len(path.sequence)} topics, ~{path.estimated_duration_minutes} min"
        )
        return path

    def evaluate_progress(
        self,
        session_attempts: Sequence[Attempt],
        prior_history: Sequence[Attempt] = (),
        current_tier: DifficultyTier = DifficultyTier.EASY,
    ) -> SessionProgress:
        """Evaluate a finished session and recommend the next tier."""
        return self.progress_evaluator.evaluate(session_attempts, prior_history, current_tier)

    async def _fetch_histories(self, learner_id: str, topics: Sequence[str]) -> dict[str, list[Attempt]]:
        histories = {}
        for topic in topics:
            try:
                histories[topic] = await self.history_provider.get_attempt_history(
                    learner_id, topic, self.settings.planning_window_size
                )
            except Exception as e:
                logger.error(f"{PRIORITIZE_FAILURE_MESSAGE} for learner {learner_id}, topic {topic}: {e}")
                raise CollaboratorFailure(PRIORITIZE_FAILURE_MESSAGE) from e
        return histories
