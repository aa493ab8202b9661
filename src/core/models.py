"""
Core Models - Canonical data types for adaptive sequencing.

Design:
- DifficultyTier: Enum for item difficulty with numeric distance values
- Attempt: One recorded answer, read-only to the engine
- ProficiencyEstimate: Derived 1-10 skill estimate for a topic
- CandidateItem / SequencedItem: Input pool entries and output positions
- DifficultyState: Per-build value object threaded through the sequencing loop
- TopicPriority: One row of a prioritized topic list

All values are recomputed on demand; nothing here is persisted by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

MIN_LEVEL = 1.0
MAX_LEVEL = 10.0
UNKNOWN_TIER_VALUE = 5

NO_QUESTIONS_AVAILABLE = "No questions available"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def clamp_level(value: float) -> float:
    """Clamp a proficiency or difficulty value onto the 1-10 scale."""
    return clamp(value, MIN_LEVEL, MAX_LEVEL)


class DifficultyTier(str, Enum):
    """
    Item difficulty tier.

    Numeric values place tiers on the same 1-10 scale as proficiency
    so distances can be computed directly.
    """

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @property
    def numeric_value(self) -> int:
        """Position of the tier on the 1-10 scale."""
        return {
            DifficultyTier.EASY: 3,
            DifficultyTier.MEDIUM: 6,
            DifficultyTier.HARD: 9,
        }[self]

    @classmethod
    def ordered(cls) -> list[DifficultyTier]:
        """Tiers from easiest to hardest."""
        return [cls.EASY, cls.MEDIUM, cls.HARD]

    def step(self, delta: int) -> DifficultyTier:
        """Move up (positive) or down (negative) by tiers, stopping at the ends."""
        tiers = DifficultyTier.ordered()
        index = tiers.index(self) + delta
        return tiers[int(clamp(index, 0, len(tiers) - 1))]


def difficulty_value(tier: DifficultyTier | str) -> int:
    """
    Map a tier (or raw tier string) to its numeric value.

    Unrecognised strings map to the middle of the scale.
    """
    try:
        return DifficultyTier(tier).numeric_value
    except ValueError:
        return UNKNOWN_TIER_VALUE


class SelectionRationale(str, Enum):
    """Why an item was placed in a sequence."""

    OPTIMAL_MATCH = "Optimal difficulty match"
    CHALLENGE = "Challenge question"
    CONFIDENCE_BUILDING = "Confidence building question"


class SkillLevel(str, Enum):
    """Overall learner stage across all topics."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


@dataclass(frozen=True)
class Attempt:
    """A single recorded answer."""

    topic: str
    difficulty_tier: DifficultyTier
    correct: bool
    time_spent_ms: float
    occurred_at: datetime
    item_id: str | None = None
    session_id: str | None = None  # Quiz/session the attempt belongs to

    @property
    def time_spent_seconds(self) -> float:
        return self.time_spent_ms / 1000.0


@dataclass(frozen=True)
class ProficiencyEstimate:
    """
    Proficiency of a learner in one topic.

    level is always on the 1-10 scale; sample_size is the number of
    attempts the estimate was computed from.
    """

    topic: str | None
    level: float
    sample_size: int
    computed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    # Signals behind the level
    accuracy: float = 0.0
    average_time_seconds: float = 0.0
    learning_velocity: float = 0.0  # >0 improving, <0 declining
    tier_accuracy: dict[str, float] = field(default_factory=dict)
    components: dict[str, float] = field(default_factory=dict)

    @property
    def has_history(self) -> bool:
        return self.sample_size > 0


@dataclass(frozen=True)
class CandidateItem:
    """A practice item eligible for sequencing."""

    id: str
    topic: str
    difficulty_tier: DifficultyTier
    eligibility_tags: frozenset[str] = frozenset()

    @property
    def difficulty_value(self) -> int:
        return difficulty_value(self.difficulty_tier)


@dataclass(frozen=True)
class SequencedItem:
    """One position in a generated sequence."""

    item: CandidateItem
    expected_difficulty: float  # 1-10
    selection_confidence: float  # 0-1
    rationale: SelectionRationale
    position: int = 0
    score: float = 0.0
    target_difficulty: float | None = None
    window_relaxed: bool = False  # Picked outside the target window


@dataclass(frozen=True)
class DifficultyState:
    """Difficulty target and streak counters for one generation pass."""

    current_target: float
    correct_streak: int = 0
    incorrect_streak: int = 0


@dataclass(frozen=True)
class TopicPriority:
    """A topic's place in a study plan."""

    topic: str
    proficiency: float
    priority_rank: int
    accuracy: float = 0.0
    attempts: int = 0
    needs_work: bool = True


@dataclass
class SequenceResult:
    """
    Output of a sequencing call.

    Behaves like the list of sequenced items; reason explains an empty
    sequence and is None when items were produced.
    """

    items: list[SequencedItem]
    estimate: ProficiencyEstimate
    reason: str | None = None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_ids(self) -> list[str]:
        return [s.item.id for s in self.items]
