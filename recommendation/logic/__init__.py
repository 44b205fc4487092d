"""
Recommendation Logic Module

Provides the deterministic compatibility-scoring engine for school programs.
"""

from .contracts import (
    StudentScores,
    GradeRecord,
    Preferences,
    Formation,
    Recommandation,
    RecommendationOutput,
    ScoreBreakdown,
)
from .engine import RecommendationEngine, recommend
from .classifier import classify_program, classify_score
from .adapter import aggregate_grades, to_formation
from .constants import (
    Niveau,
    DeliveryMode,
    ModeSouhaite,
    ProgramRule,
    PROGRAM_RULES,
    DEFAULT_RULE,
)

__all__ = [
    # Main engine
    "RecommendationEngine",
    "recommend",

    # Classifier / aggregation
    "classify_program",
    "classify_score",
    "aggregate_grades",
    "to_formation",

    # Contracts
    "StudentScores",
    "GradeRecord",
    "Preferences",
    "Formation",
    "Recommandation",
    "RecommendationOutput",
    "ScoreBreakdown",

    # Rules and enums
    "ProgramRule",
    "PROGRAM_RULES",
    "DEFAULT_RULE",
    "Niveau",
    "DeliveryMode",
    "ModeSouhaite",
]
