"""
Display helpers for the presentation layer.

The per-formation bias is cosmetic variability applied to the score shown
to students. It is not part of the engine's contract and never feeds back
into ranking or tiers.
"""

from .logic.constants import SCORE_MIN, SCORE_MAX


def name_bias(nom: str) -> int:
    """Deterministic offset in [-4, 4] derived from the formation name only."""
    return sum(ord(char) for char in nom) % 9 - 4


def display_score(score: float, nom: str) -> float:
    """Score shown to the student: engine score plus name bias, kept in [0, 100]."""
    return min(SCORE_MAX, max(SCORE_MIN, score + name_bias(nom)))
