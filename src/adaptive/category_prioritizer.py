"""
Category Prioritizer.

Orders topics for a multi-topic study plan:
- Topics needing work (accuracy < 70%, or never attempted) come first
- Within each group, lower proficiency comes first
- Remaining ties keep the caller's topic order
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from src.adaptive.proficiency_estimator import ProficiencyEstimator, accuracy_of
from src.core.models import Attempt, TopicPriority

DEFAULT_NEEDS_WORK_ACCURACY = 0.7


class CategoryPrioritizer:
    """Rank topics by how much attention they need."""

    def __init__(
        self,
        estimator: ProficiencyEstimator | None = None,
        needs_work_accuracy: float = DEFAULT_NEEDS_WORK_ACCURACY,
    ):
        self.estimator = estimator or ProficiencyEstimator()
        self.needs_work_accuracy = needs_work_accuracy

    def needs_work(self, history: Sequence[Attempt]) -> bool:
        """Never-attempted topics always need work."""
        if not history:
            return True
        return accuracy_of(history) < self.needs_work_accuracy

    def prioritize(
        self,
        topics: Iterable[str],
        histories_by_topic: Mapping[str, Sequence[Attempt]],
    ) -> list[TopicPriority]:
        """
        Produce a priority-ordered topic list.

        Args:
            topics: Topics to rank (duplicates keep their first position)
            histories_by_topic: Attempts per topic, newest first; missing
                topics are treated as never attempted

        Returns:
            TopicPriority list with 1-based priority_rank
        """
        ordered_topics = list(dict.fromkeys(topics))

        rows = []
        for topic in ordered_topics:
            history = list(histories_by_topic.get(topic, []))
            estimate = self.estimator.estimate(history, topic=topic)
            rows.append((topic, estimate.level, accuracy_of(history), len(history), self.needs_work(history)))

        # sorted() is stable, so equal keys keep input order
        rows = sorted(rows, key=lambda row: (not row[4], row[1]))

        return [
            TopicPriority(
                topic=topic,
                proficiency=level,
                priority_rank=rank,
                accuracy=accuracy,
                attempts=attempts,
                needs_work=needs_work,
            )
            for rank, (topic, level, accuracy, attempts, needs_work) in enumerate(rows, start=1)
        ]
