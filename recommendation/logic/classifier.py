"""
Classifier

Two deterministic classifications:
- Tier (niveau) of a final score: Fortement recommandé / Adapté / À renforcer
- Scoring profile of a formation from its free-text name (keyword rules)
"""

from typing import Any, Dict, List, Tuple

from .contracts import Recommandation
from .constants import (
    Niveau,
    NIVEAU_THRESHOLDS,
    ProgramRule,
    PROGRAM_RULES,
    DEFAULT_RULE,
)


# =============================================================================
# TIERS
# =============================================================================

def classify_score(score: float) -> Niveau:
    """
    Tier for a final score. Lower bounds are inclusive.

    Args:
        score: Final score on the 0-100 scale

    Returns:
        Niveau enum value
    """
    for niveau, lower_bound in NIVEAU_THRESHOLDS:
        if score >= lower_bound:
            return niveau
    return Niveau.A_RENFORCER


def get_niveau_counts(recommendations: List[Recommandation]) -> Dict[str, int]:
    """
    Count recommendations in each tier.
    """
    counts = {niveau.value: 0 for niveau in Niveau}
    for rec in recommendations:
        counts[rec.niveau] += 1
    return counts


# =============================================================================
# PROGRAM RULES
# =============================================================================

def classify_program(name: Any) -> ProgramRule:
    """
    Pick the scoring rule for a free-text program name.

    Case-insensitive substring containment, first rule in table order wins.
    Names that are missing or not strings fall back to DEFAULT_RULE.

    Args:
        name: Program name as found in the catalog

    Returns:
        Matching ProgramRule, or DEFAULT_RULE
    """
    if not isinstance(name, str) or not name.strip():
        return DEFAULT_RULE

    lowered = name.lower()
    for rule in PROGRAM_RULES:
        if any(keyword in lowered for keyword in rule.keywords):
            return rule

    return DEFAULT_RULE


def classify_all(names: List[Any]) -> List[Tuple[Any, ProgramRule]]:
    """Classify several program names, keeping input order."""
    return [(name, classify_program(name)) for name in names]
