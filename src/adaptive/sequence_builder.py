"""
Adaptive Sequence Builder.

Orchestrates one sequencing call:
1. Fetch the learner's recent attempts and estimate proficiency
2. Fetch a candidate pool in the tiers that suit that proficiency
3. Repeatedly pick the best unused item while the difficulty target
   is paced by the DifficultyAdjuster

Empty history and empty pools are valid outcomes. Collaborator failures
are wrapped in CollaboratorFailure and propagated without retry.
"""
from __future__ import annotations

from collections.abc import Collection

from loguru import logger

from src.adaptive.difficulty_adjuster import (
    DifficultyAdjuster,
    OutcomePredictor,
    SimulatedOutcomePredictor,
)
from src.adaptive.item_scorer import MAX_SCORE, ItemScorer
from src.adaptive.proficiency_estimator import ProficiencyEstimator
from src.core.collaborators import AttemptHistoryProvider, CandidatePoolProvider
from src.core.exceptions import CollaboratorFailure, InputError
from src.core.models import (
    NO_QUESTIONS_AVAILABLE,
    CandidateItem,
    DifficultyTier,
    ProficiencyEstimate,
    SelectionRationale,
    SequencedItem,
    SequenceResult,
    clamp,
    clamp_level,
)

SEQUENCE_FAILURE_MESSAGE = "Failed to generate adaptive sequence"
DEFAULT_POOL_MULTIPLIER = 2


def difficulty_range_for(level: float) -> list[DifficultyTier]:
    """Tiers worth fetching for a proficiency level."""
    if level <= 3:
        return [DifficultyTier.EASY]
    if level <= 6:
        return [DifficultyTier.EASY, DifficultyTier.MEDIUM]
    return [DifficultyTier.MEDIUM, DifficultyTier.HARD]


def expected_difficulty(item: CandidateItem, level: float) -> float:
    """Item difficulty nudged by 10% of its gap from the learner's level."""
    base = item.difficulty_value
    return clamp_level(base + 0.1 * (base - level))


def selection_rationale(item: CandidateItem, level: float) -> SelectionRationale:
    base = item.difficulty_value
    if abs(base - level) <= 1:
        return SelectionRationale.OPTIMAL_MATCH
    if base > level:
        return SelectionRationale.CHALLENGE
    return SelectionRationale.CONFIDENCE_BUILDING


class SequenceBuilder:
    """
    Build an ordered batch of practice items for a learner and topic.

    Collaborators are injected; the builder keeps no per-call state, so a
    single instance can serve concurrent requests.
    """

    def __init__(
        self,
        history_provider: AttemptHistoryProvider,
        pool_provider: CandidatePoolProvider,
        estimator: ProficiencyEstimator | None = None,
        scorer: ItemScorer | None = None,
        adjuster: DifficultyAdjuster | None = None,
        predictor: OutcomePredictor | None = None,
        known_topics: Collection[str] | None = None,
        pool_size_multiplier: int = DEFAULT_POOL_MULTIPLIER,
    ):
        """
        Args:
            history_provider: Source of attempt history
            pool_provider: Source of candidate items
            estimator: Proficiency estimator (default window of 20)
            scorer: Item scorer (default ±2 target window)
            adjuster: Difficulty adjuster (default 3/2 streak thresholds)
            predictor: Look-ahead outcome predictor (default simulated)
            known_topics: Accepted topics, or None to accept any topic
            pool_size_multiplier: Pool requested as max_items × multiplier
        """
        self.history_provider = history_provider
        self.pool_provider = pool_provider
        self.estimator = estimator or ProficiencyEstimator()
        self.scorer = scorer or ItemScorer()
        self.adjuster = adjuster or DifficultyAdjuster()
        self.predictor = predictor or SimulatedOutcomePredictor()
        self.known_topics = set(known_topics) if known_topics is not None else None
        self.pool_size_multiplier = pool_size_multiplier

    def validate_request(self, topic: str, max_items: int) -> None:
        """Raise InputError for requests that must not reach collaborators."""
        if max_items <= 0:
            raise InputError(f"max_items must be positive, got {max_items}")
        if self.known_topics is not None and topic not in self.known_topics:
            raise InputError(f"Unknown topic: {topic}")

    async def build(
        self,
        learner_id: str,
        topic: str,
        max_items: int,
        adaptive_difficulty: bool = True,
        audience: str | None = None,
    ) -> SequenceResult:
        """
        Generate an adaptive sequence.

        Args:
            learner_id: Learner identifier
            topic: Topic to practise
            max_items: Maximum sequence length
            adaptive_difficulty: Pace the difficulty target while building
            audience: Optional eligibility tag every item must carry

        Returns:
            SequenceResult with at most max_items items. An empty pool gives
            an empty result with reason "No questions available".

        Raises:
            InputError: Invalid max_items or unknown topic
            CollaboratorFailure: History or pool fetch failed
        """
        self.validate_request(topic, max_items)

        try:
            history = await self.history_provider.get_attempt_history(
                learner_id, topic, self.estimator.window_size
            )
        except Exception as e:
            self._log_failure(learner_id, topic, e)
            raise CollaboratorFailure(SEQUENCE_FAILURE_MESSAGE) from e

        estimate = self.estimator.estimate(history, topic=topic)
        tiers = difficulty_range_for(estimate.level)

        try:
            pool = await self.pool_provider.get_candidate_pool(
                topic, tiers, max_items * self.pool_size_multiplier
            )
        except Exception as e:
            self._log_failure(learner_id, topic, e)
            raise CollaboratorFailure(SEQUENCE_FAILURE_MESSAGE) from e

        if audience is not None:
            pool = [item for item in pool if audience in item.eligibility_tags]

        if not pool:
            logger.warning(f"No candidate items for topic {topic} (tiers: {[t.value for t in tiers]})")
            return SequenceResult(items=[], estimate=estimate, reason=NO_QUESTIONS_AVAILABLE)

        recently_seen = {a.item_id for a in history[: self.estimator.window_size] if a.item_id}
        items = self._select_items(pool, estimate, recently_seen, max_items, adaptive_difficulty)

        logger.info(
            f"Generated adaptive sequence of {len(items)} items for learner {learner_id} "
            f"(topic: {topic}, proficiency: {estimate.level:.1f})"
        )
        return SequenceResult(items=items, estimate=estimate)

    @staticmethod
    def _log_failure(learner_id: str, topic: str, error: Exception) -> None:
        logger.error(f"{SEQUENCE_FAILURE_MESSAGE} for learner {learner_id}, topic {topic}: {error}")

    def _select_items(
        self,
        pool: list[CandidateItem],
        estimate: ProficiencyEstimate,
        recently_seen: set[str],
        max_items: int,
        adaptive_difficulty: bool,
    ) -> list[SequencedItem]:
        state = self.adjuster.initial_state(estimate.level)
        used_ids: set[str] = set()
        selected: list[SequencedItem] = []

        for position in range(max_items):
            pick = self.scorer.select_best(
                pool,
                estimate,
                recently_seen,
                position,
                target=state.current_target,
                used_ids=used_ids,
            )
            if pick is None:
                break

            selected.append(
                SequencedItem(
                    item=pick.item,
                    expected_difficulty=expected_difficulty(pick.item, estimate.level),
                    selection_confidence=clamp(pick.score / MAX_SCORE, 0.0, 1.0),
                    rationale=selection_rationale(pick.item, estimate.level),
                    position=position,
                    score=pick.score,
                    target_difficulty=state.current_target,
                    window_relaxed=pick.window_relaxed,
                )
            )
            used_ids.add(pick.item.id)

            if adaptive_difficulty:
                predicted = self.predictor.predict(pick.item.difficulty_value, state.current_target)
                state = self.adjuster.transition(state, predicted)

        return selected
