"""
Difficulty Adjuster.

A small state machine that paces difficulty while a sequence is built:
- 3 predicted-correct answers in a row raise the target by one level
- 2 predicted-incorrect answers in a row lower it by one level

Sequences are generated ahead of any real answers, so outcomes are
predicted by an OutcomePredictor. The simulated predictor is a pacing
device for a single generation pass, not a model of the learner's future
answers. The deterministic predictor replaces the dice roll with a fixed
rule for reproducible runs.
"""
from __future__ import annotations

import random
from dataclasses import replace
from typing import Protocol

from loguru import logger

from src.core.models import DifficultyState, clamp, clamp_level

DEFAULT_CORRECT_STREAK = 3
DEFAULT_INCORRECT_STREAK = 2

BASE_SUCCESS_PROBABILITY = 0.7
PROBABILITY_STEP = 0.1
MIN_SUCCESS_PROBABILITY = 0.1
MAX_SUCCESS_PROBABILITY = 0.9


def success_probability(item_value: float, current_target: float) -> float:
    """
    Chance of a correct answer at the current difficulty target.

    Formula: clamp(0.1, 0.9, 0.7 - 0.1 × (item_value - target))
    """
    raw = BASE_SUCCESS_PROBABILITY - PROBABILITY_STEP * (item_value - current_target)
    return clamp(raw, MIN_SUCCESS_PROBABILITY, MAX_SUCCESS_PROBABILITY)


class OutcomePredictor(Protocol):
    """Predicts whether an item would be answered correctly."""

    def predict(self, item_value: float, current_target: float) -> bool:
        ...


class SimulatedOutcomePredictor:
    """Roll against success_probability with an injected RNG."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def predict(self, item_value: float, current_target: float) -> bool:
        return self._rng.random() < success_probability(item_value, current_target)


class DeterministicOutcomePredictor:
    """Predict correct whenever success is at least as likely as not."""

    def predict(self, item_value: float, current_target: float) -> bool:
        return success_probability(item_value, current_target) >= 0.5


def build_predictor(strategy: str, seed: int | None = None) -> OutcomePredictor:
    """
    Create the predictor named by the lookahead strategy setting.

    Args:
        strategy: "simulated" or "deterministic"
        seed: Optional RNG seed for the simulated strategy
    """
    if strategy == "deterministic":
        return DeterministicOutcomePredictor()
    if strategy == "simulated":
        return SimulatedOutcomePredictor(random.Random(seed))
    raise ValueError(f"Unknown lookahead strategy: {strategy}")


class DifficultyAdjuster:
    """
    Streak-driven difficulty transitions.

    Transitions return a new DifficultyState; the adjuster itself holds
    no per-call state and can be shared between concurrent builds.
    """

    def __init__(
        self,
        correct_streak_threshold: int = DEFAULT_CORRECT_STREAK,
        incorrect_streak_threshold: int = DEFAULT_INCORRECT_STREAK,
    ):
        self.correct_streak_threshold = correct_streak_threshold
        self.incorrect_streak_threshold = incorrect_streak_threshold

    @staticmethod
    def initial_state(level: float) -> DifficultyState:
        """Start at the learner's proficiency with empty streaks."""
        return DifficultyState(current_target=clamp_level(level))

    def transition(self, state: DifficultyState, predicted_correct: bool) -> DifficultyState:
        """
        Apply one predicted outcome.

        Args:
            state: Current difficulty state
            predicted_correct: Outcome for the item just placed

        Returns:
            Next DifficultyState
        """
        if predicted_correct:
            streak = state.correct_streak + 1
            if streak >= self.correct_streak_threshold:
                target = clamp_level(state.current_target + 1)
                logger.debug(f"Correct streak of {streak}: target {state.current_target:.2f} -> {target:.2f}")
                return DifficultyState(current_target=target)
            return replace(state, correct_streak=streak, incorrect_streak=0)

        streak = state.incorrect_streak + 1
        if streak >= self.incorrect_streak_threshold:
            target = clamp_level(state.current_target - 1)
            logger.debug(f"Incorrect streak of {streak}: target {state.current_target:.2f} -> {target:.2f}")
            return DifficultyState(current_target=target)
        return replace(state, correct_streak=0, incorrect_streak=streak)
