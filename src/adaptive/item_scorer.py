"""
Item Scorer.

Ranks candidate items for the next position in a sequence using:
- Difficulty fit against the learner's proficiency (0-3 points)
- Novelty, avoiding items seen in the recent window (0-2 points)
- Position fit: start easier, ramp up (0.5-1 point)
"""
from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from src.core.models import CandidateItem, ProficiencyEstimate

DIFFICULTY_FIT_WEIGHT = 3.0
NOVELTY_WEIGHT = 2.0
MAX_SCORE = 6.0

WARMUP_POSITIONS = 3
EASY_CEILING = 4  # Tier values at or below this count as warm-up items
DEFAULT_TARGET_WINDOW = 2.0


@dataclass(frozen=True)
class ScoredCandidate:
    """Winning candidate for one position."""

    item: CandidateItem
    score: float
    window_relaxed: bool = False


class ItemScorer:
    """Multi-criteria scoring of candidate items."""

    def __init__(self, target_window: float = DEFAULT_TARGET_WINDOW):
        """
        Args:
            target_window: Max distance from the difficulty target for an
                item to be preferred (default ±2)
        """
        self.target_window = target_window

    @staticmethod
    def difficulty_fit(item: CandidateItem, proficiency: ProficiencyEstimate) -> float:
        """1 at an exact match, falling to 0 five levels away."""
        difference = abs(item.difficulty_value - proficiency.level)
        return max(0.0, 1 - difference / 5)

    @staticmethod
    def novelty(item: CandidateItem, recently_seen_ids: Collection[str]) -> float:
        return 0.0 if item.id in recently_seen_ids else 1.0

    @staticmethod
    def position_fit(item: CandidateItem, position: int) -> float:
        """Prefer easy items in the first three slots and harder ones after."""
        value = item.difficulty_value
        if position < WARMUP_POSITIONS and value <= EASY_CEILING:
            return 1.0
        if position >= WARMUP_POSITIONS and value > EASY_CEILING:
            return 1.0
        return 0.5

    def score(
        self,
        item: CandidateItem,
        proficiency: ProficiencyEstimate,
        recently_seen_ids: Collection[str],
        position: int,
    ) -> float:
        """
        Score a candidate for a sequence position.

        Formula:
            3 × difficulty_fit + 2 × novelty + position_fit

        Returns:
            Score in [0.5, 6]
        """
        return (
            DIFFICULTY_FIT_WEIGHT * self.difficulty_fit(item, proficiency)
            + NOVELTY_WEIGHT * self.novelty(item, recently_seen_ids)
            + self.position_fit(item, position)
        )

    def within_target(self, item: CandidateItem, target: float) -> bool:
        return abs(item.difficulty_value - target) <= self.target_window

    def select_best(
        self,
        candidates: Sequence[CandidateItem],
        proficiency: ProficiencyEstimate,
        recently_seen_ids: Collection[str],
        position: int,
        target: float,
        used_ids: Collection[str] = (),
    ) -> ScoredCandidate | None:
        """
        Pick the best unused candidate for a position.

        Candidates inside the target window are preferred. When none are,
        every unused candidate is considered and the pick is flagged as
        relaxed. Ties go to the earliest candidate in input order.

        Returns:
            ScoredCandidate, or None when every candidate is used
        """
        unused = [c for c in candidates if c.id not in used_ids]
        if not unused:
            return None

        in_window = [c for c in unused if self.within_target(c, target)]
        relaxed = not in_window
        pool = unused if relaxed else in_window

        best: CandidateItem | None = None
        best_score = float("-inf")
        for candidate in pool:
            candidate_score = self.score(candidate, proficiency, recently_seen_ids, position)
            if candidate_score > best_score:
                best, best_score = candidate, candidate_score

        return ScoredCandidate(item=best, score=best_score, window_relaxed=relaxed)
