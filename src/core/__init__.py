"""
Core Module - Shared domain models and interfaces.

Components:
- models: Attempts, candidate items, estimates, sequenced items
- collaborators: History and candidate pool protocols (+ in-memory versions)
- exceptions: InputError / CollaboratorFailure taxonomy
- schemas: Pydantic fixture records for JSON input

Design Principle:
src/adaptive/ imports from src/core/; nothing in core depends on adaptive.
"""

from src.core.collaborators import (
    AttemptHistoryProvider,
    CandidatePoolProvider,
    InMemoryAttemptHistory,
    InMemoryCandidatePool,
)
from src.core.exceptions import AdaptiveEngineError, CollaboratorFailure, InputError
from src.core.models import (
    NO_QUESTIONS_AVAILABLE,
    Attempt,
    CandidateItem,
    DifficultyState,
    DifficultyTier,
    ProficiencyEstimate,
    SelectionRationale,
    SequencedItem,
    SequenceResult,
    SkillLevel,
    TopicPriority,
)

__all__ = [
    # Models
    "Attempt",
    "CandidateItem",
    "DifficultyState",
    "DifficultyTier",
    "ProficiencyEstimate",
    "SelectionRationale",
    "SequencedItem",
    "SequenceResult",
    "SkillLevel",
    "TopicPriority",
    "NO_QUESTIONS_AVAILABLE",
    # Collaborators
    "AttemptHistoryProvider",
    "CandidatePoolProvider",
    "InMemoryAttemptHistory",
    "InMemoryCandidatePool",
    # Errors
    "AdaptiveEngineError",
    "InputError",
    "CollaboratorFailure",
]
