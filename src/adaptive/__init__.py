"""
Adaptive Learning Engine.

Adaptive question sequencing with mastery estimation.

Components:
- ProficiencyEstimator: 1-10 proficiency from recent attempts
- ItemScorer: Ranks candidates by difficulty fit, novelty and position
- DifficultyAdjuster: Streak state machine pacing the difficulty target
- SequenceBuilder: Builds an ordered practice sequence
- CategoryPrioritizer: Orders topics by need
- LearningPathPlanner: Multi-topic study plan with milestones
- ProgressEvaluator: Session results and next-tier recommendation
- LearningEngine: Main orchestration layer
"""
from src.adaptive.category_prioritizer import CategoryPrioritizer
from src.adaptive.difficulty_adjuster import (
    DeterministicOutcomePredictor,
    DifficultyAdjuster,
    OutcomePredictor,
    SimulatedOutcomePredictor,
    build_predictor,
    success_probability,
)
from src.adaptive.item_scorer import ItemScorer, ScoredCandidate
from src.adaptive.learning_engine import LearningEngine
from src.adaptive.learning_path import LearningPath, LearningPathPlanner, Milestone
from src.adaptive.proficiency_estimator import NEUTRAL_PROFICIENCY, ProficiencyEstimator
from src.adaptive.progress_evaluator import FeedbackLevel, ProgressEvaluator, SessionProgress
from src.adaptive.sequence_builder import SequenceBuilder, difficulty_range_for

__all__ = [
    # Main engine
    "LearningEngine",
    # Component classes
    "ProficiencyEstimator",
    "ItemScorer",
    "DifficultyAdjuster",
    "SequenceBuilder",
    "CategoryPrioritizer",
    "LearningPathPlanner",
    "ProgressEvaluator",
    # Look-ahead
    "OutcomePredictor",
    "SimulatedOutcomePredictor",
    "DeterministicOutcomePredictor",
    "build_predictor",
    "success_probability",
    # Results
    "ScoredCandidate",
    "LearningPath",
    "Milestone",
    "SessionProgress",
    "FeedbackLevel",
    # Helpers
    "difficulty_range_for",
    "NEUTRAL_PROFICIENCY",
]
