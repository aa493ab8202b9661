"""
Learning Path Planner.

Turns a prioritized topic list into a multi-topic study plan with an overall
skill level, time estimate and per-topic milestones.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from src.core.models import SkillLevel, TopicPriority

MINUTES_PER_TOPIC = {
    SkillLevel.BEGINNER: 45,
    SkillLevel.INTERMEDIATE: 35,
    SkillLevel.ADVANCED: 25,
}

DEFAULT_BEGINNER_PRIORITY = (
    "ARITHMETIC_REASONING",
    "MATHEMATICS_KNOWLEDGE",
    "WORD_KNOWLEDGE",
    "PARAGRAPH_COMPREHENSION",
)


@dataclass(frozen=True)
class Milestone:
    """Target for one topic in the path."""

    topic: str
    target_accuracy: float
    estimated_questions: int


@dataclass
class LearningPath:
    """Complete study plan across topics."""

    sequence: list[str] = field(default_factory=list)
    skill_level: SkillLevel = SkillLevel.BEGINNER
    estimated_duration_minutes: int = 0
    milestones: list[Milestone] = field(default_factory=list)
    reasoning: str = ""

    @property
    def total_questions(self) -> int:
        return sum(m.estimated_questions for m in self.milestones)


class LearningPathPlanner:
    """
    Plan a study path from topic priorities.

    Skill level thresholds:
    - Advanced: 85%+ mean accuracy over 100+ attempts
    - Intermediate: 65%+ mean accuracy over 50+ attempts
    - Beginner: everything else
    """

    def __init__(self, beginner_priority: Sequence[str] = DEFAULT_BEGINNER_PRIORITY):
        """
        Args:
            beginner_priority: Fundamentals that open a beginner's path
        """
        self.beginner_priority = list(beginner_priority)

    @staticmethod
    def determine_skill_level(priorities: Sequence[TopicPriority]) -> SkillLevel:
        if not priorities:
            return SkillLevel.BEGINNER

        mean_accuracy = sum(p.accuracy for p in priorities) / len(priorities)
        total_attempts = sum(p.attempts for p in priorities)

        if mean_accuracy >= 0.85 and total_attempts >= 100:
            return SkillLevel.ADVANCED
        if mean_accuracy >= 0.65 and total_attempts >= 50:
            return SkillLevel.INTERMEDIATE
        return SkillLevel.BEGINNER

    def order_topics(self, priorities: Sequence[TopicPriority], skill_level: SkillLevel) -> list[str]:
        """Priority order, with fundamentals pulled forward for beginners."""
        ranked = [p.topic for p in sorted(priorities, key=lambda p: p.priority_rank)]
        if skill_level != SkillLevel.BEGINNER:
            return ranked

        fundamentals = [t for t in self.beginner_priority if t in ranked]
        return fundamentals + [t for t in ranked if t not in fundamentals]

    @staticmethod
    def estimate_questions_needed(accuracy: float) -> int:
        if accuracy >= 0.8:
            return 15  # Maintenance
        if accuracy >= 0.6:
            return 25  # Improvement
        return 40  # Foundational work

    def build_milestones(self, sequence: Sequence[str], priorities: Sequence[TopicPriority]) -> list[Milestone]:
        by_topic = {p.topic: p for p in priorities}
        return [
            Milestone(
                topic=topic,
                target_accuracy=min(1.0, max(0.8, by_topic[topic].accuracy + 0.15)),
                estimated_questions=self.estimate_questions_needed(by_topic[topic].accuracy),
            )
            for topic in sequence
        ]

    @staticmethod
    def describe(priorities: Sequence[TopicPriority], skill_level: SkillLevel) -> str:
        weak = [p.topic for p in priorities if p.needs_work]
        level_name = skill_level.value.lower()
        if not weak:
            return f"No weak areas at the {level_name} level; focus on maintaining strong performance."
        return (
            f"Based on your {level_name} skill level, prioritizing {len(weak)} "
            f"areas that need improvement: {', '.join(weak)}."
        )

    def plan(self, priorities: Sequence[TopicPriority]) -> LearningPath:
        """
        Build a learning path.

        Args:
            priorities: Output of CategoryPrioritizer.prioritize

        Returns:
            LearningPath ordered for study
        """
        skill_level = self.determine_skill_level(priorities)
        sequence = self.order_topics(priorities, skill_level)

        return LearningPath(
            sequence=sequence,
            skill_level=skill_level,
            estimated_duration_minutes=len(sequence) * MINUTES_PER_TOPIC[skill_level],
            milestones=self.build_milestones(sequence, priorities),
            reasoning=self.describe(priorities, skill_level),
        )
