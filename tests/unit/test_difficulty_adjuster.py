"""
Unit tests for DifficultyAdjuster and outcome predictors.

Tests:
- Streak transitions and resets
- Target clamping at both ends of the scale
- Success probability bounds
- Simulated vs deterministic look-ahead
"""

import random

import pytest

from src.adaptive.difficulty_adjuster import (
    DeterministicOutcomePredictor,
    DifficultyAdjuster,
    SimulatedOutcomePredictor,
    build_predictor,
    success_probability,
)
from src.core.models import DifficultyState


@pytest.fixture
def adjuster():
    return DifficultyAdjuster()


def run(adjuster, state, outcomes):
    for outcome in outcomes:
        state = adjuster.transition(state, outcome)
    return state


class TestTransitions:
    def test_initial_state_starts_at_level(self, adjuster):
        state = adjuster.initial_state(6.4)
        assert state == DifficultyState(current_target=6.4, correct_streak=0, incorrect_streak=0)

    def test_initial_state_is_clamped(self, adjuster):
        assert adjuster.initial_state(14).current_target == 10.0

    def test_three_correct_raise_target(self, adjuster):
        state = run(adjuster, adjuster.initial_state(5), [True, True])
        assert state.current_target == 5
        assert state.correct_streak == 2

        state = adjuster.transition(state, True)
        assert state.current_target == 6
        assert state.correct_streak == 0

    def test_two_incorrect_lower_target(self, adjuster):
        state = run(adjuster, adjuster.initial_state(5), [False, False])
        assert state.current_target == 4
        assert state.incorrect_streak == 0

    def test_opposite_outcome_resets_streak(self, adjuster):
        state = run(adjuster, adjuster.initial_state(5), [True, True, False])
        assert state.correct_streak == 0
        assert state.incorrect_streak == 1

        state = adjuster.transition(state, True)
        assert state.incorrect_streak == 0
        assert state.correct_streak == 1
        assert state.current_target == 5

    def test_target_clamped_at_bounds(self, adjuster):
        high = run(adjuster, adjuster.initial_state(9.5), [True] * 9)
        low = run(adjuster, adjuster.initial_state(1.5), [False] * 6)

        assert high.current_target == 10.0
        assert low.current_target == 1.0

    def test_transition_does_not_mutate_input(self, adjuster):
        state = adjuster.initial_state(5)
        adjuster.transition(state, True)
        assert state.correct_streak == 0

    def test_custom_thresholds(self):
        adjuster = DifficultyAdjuster(correct_streak_threshold=1, incorrect_streak_threshold=1)
        state = adjuster.transition(adjuster.initial_state(5), True)
        assert state.current_target == 6


class TestSuccessProbability:
    def test_item_at_target(self):
        assert success_probability(6, 6) == pytest.approx(0.7)

    def test_probability_bounds(self):
        assert success_probability(9, 1) == pytest.approx(0.1)
        assert success_probability(1, 10) == pytest.approx(0.9)

    def test_harder_item_is_less_likely(self):
        assert success_probability(9, 6) < success_probability(3, 6)


class TestPredictors:
    def test_seeded_simulation_is_reproducible(self):
        first = SimulatedOutcomePredictor(random.Random(7))
        second = SimulatedOutcomePredictor(random.Random(7))

        a = [first.predict(6, 5) for _ in range(20)]
        b = [second.predict(6, 5) for _ in range(20)]

        assert a == b

    def test_simulation_tracks_probability(self):
        predictor = SimulatedOutcomePredictor(random.Random(42))
        hits = sum(predictor.predict(3, 10) for _ in range(2000))
        # p = 0.9
        assert 0.85 < hits / 2000 < 0.95

    def test_deterministic_rule(self):
        predictor = DeterministicOutcomePredictor()
        assert predictor.predict(6, 6) is True
        assert predictor.predict(9, 6) is False  # p = 0.4

    def test_build_predictor(self):
        assert isinstance(build_predictor("deterministic"), DeterministicOutcomePredictor)
        assert isinstance(build_predictor("simulated", seed=3), SimulatedOutcomePredictor)
        with pytest.raises(ValueError):
            build_predictor("oracle")
