"""
Unit tests for CategoryPrioritizer.

Focused on ordering rules and purity; no collaborators involved.
"""

import pytest

from src.adaptive.category_prioritizer import CategoryPrioritizer
from src.core.models import DifficultyTier


@pytest.fixture
def prioritizer():
    return CategoryPrioritizer()


class TestNeedsWork:
    def test_never_attempted_needs_work(self, prioritizer):
        assert prioritizer.needs_work([]) is True

    def test_below_seventy_percent_needs_work(self, prioritizer, history_factory):
        assert prioritizer.needs_work(history_factory([True] * 6 + [False] * 4)) is True
        assert prioritizer.needs_work(history_factory([True] * 7 + [False] * 3)) is False


class TestOrdering:
    def test_unattempted_topic_ranks_before_strong_topic(self, prioritizer, history_factory):
        # 90% accuracy over 50 attempts
        strong = history_factory(([True] * 9 + [False]) * 5, topic="B")

        priorities = prioritizer.prioritize(["B", "A"], {"B": strong})

        assert [p.topic for p in priorities] == ["A", "B"]
        assert priorities[0].needs_work is True
        assert priorities[0].attempts == 0
        assert priorities[0].proficiency == 5
        assert priorities[1].needs_work is False
        assert [p.priority_rank for p in priorities] == [1, 2]

    def test_lower_proficiency_first_within_group(self, prioritizer, history_factory):
        histories = {
            "slow": history_factory([False, False, True], time_spent_ms=170_000, topic="slow"),
            "fast": history_factory([False, False, True], time_spent_ms=5_000, topic="fast"),
            "good": history_factory([True] * 10, topic="good"),
            "better": history_factory([True] * 10, tier=DifficultyTier.HARD, topic="better"),
        }

        priorities = prioritizer.prioritize(["good", "fast", "better", "slow"], histories)

        assert [p.topic for p in priorities] == ["slow", "fast", "good", "better"]

    def test_ties_keep_input_order(self, prioritizer):
        priorities = prioritizer.prioritize(["X", "Y", "Z"], {})
        assert [p.topic for p in priorities] == ["X", "Y", "Z"]

    def test_duplicate_topics_collapse(self, prioritizer):
        priorities = prioritizer.prioritize(["X", "Y", "X"], {})
        assert [p.topic for p in priorities] == ["X", "Y"]

    def test_prioritize_is_idempotent(self, prioritizer, history_factory):
        histories = {
            "A": history_factory([True, False, True, False], topic="A"),
            "B": history_factory([True] * 8, topic="B"),
        }

        first = prioritizer.prioritize(["A", "B", "C"], histories)
        second = prioritizer.prioritize(["A", "B", "C"], histories)

        assert [(p.topic, p.priority_rank, p.proficiency) for p in first] == [
            (p.topic, p.priority_rank, p.proficiency) for p in second
        ]

    def test_custom_threshold(self, history_factory):
        prioritizer = CategoryPrioritizer(needs_work_accuracy=0.95)
        priorities = prioritizer.prioritize(["A"], {"A": history_factory([True] * 9 + [False])})
        assert priorities[0].needs_work is True
