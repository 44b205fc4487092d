"""
Dimension Scorers

Individual scoring terms for one student against one formation.
Each scorer reads only its arguments and returns plain numbers or
subject lists. All logic is deterministic - no AI/ML components.
"""

import math
from typing import Dict, List, Tuple

from .contracts import StudentScores, Preferences, Formation
from .constants import (
    GRADE_MIN,
    GRADE_MAX,
    SCORE_MIN,
    SCORE_MAX,
    MODE_MATCH_BONUS,
    MODE_MISMATCH_MALUS,
    TAG_MATCH_BONUS,
    DISTANCE_BONUS,
    DISTANCE_MALUS,
    PREREQUISITE_PENALTY_MAX,
    POINTS_FORTS_COUNT,
    ModeSouhaite,
)


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def grade_for(scores: StudentScores, subject: str) -> float:
    """
    Student grade for a subject on the 0-20 scale.

    Absent subjects count as 0. Non-finite values are treated as 0 too;
    they should have been rejected by GradeRecord before reaching here.
    """
    grade = scores.get(subject)
    if grade is None:
        return 0.0
    try:
        grade = float(grade)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(grade):
        return 0.0
    return clamp(grade, GRADE_MIN, GRADE_MAX)


def normalize_grade(grade: float) -> float:
    """Convert a 0-20 grade to the 0-100 scale."""
    return clamp(grade, GRADE_MIN, GRADE_MAX) / GRADE_MAX * 100.0


def score_competence(scores: StudentScores, formation: Formation) -> float:
    """
    Weighted competence score on the 0-100 scale.

    Weights are direct multipliers: a formation whose weights sum to less
    than 1 cannot reach 100 from this term alone.
    """
    total = 0.0
    for subject, weight in formation.poids.items():
        total += normalize_grade(grade_for(scores, subject)) * weight
    return total


def score_prerequisites(
    scores: StudentScores,
    formation: Formation
) -> Tuple[float, List[str]]:
    """
    Penalty for unmet prerequisites, and the subjects that fail them.

    Each unmet subject costs up to PREREQUISITE_PENALTY_MAX points in
    proportion to its deficit. Penalties are summed without a cap.
    """
    penalty = 0.0
    gaps: List[str] = []

    for subject, threshold in formation.prerequis.items():
        grade = grade_for(scores, subject)
        if grade < threshold:
            deficit_ratio = (threshold - grade) / max(threshold, 1)
            penalty += deficit_ratio * PREREQUISITE_PENALTY_MAX
            gaps.append(subject)

    return penalty, gaps


def score_mode(preferences: Preferences, formation: Formation) -> Tuple[float, float]:
    """
    Delivery mode (bonus, malus).

    Both checks are evaluated on every call; with a concrete wished mode
    only one of them can fire, and with "indifferent" neither does.
    """
    bonus = 0.0
    malus = 0.0

    if formation.mode == preferences.mode_souhaite:
        bonus += MODE_MATCH_BONUS
    if (
        preferences.mode_souhaite != ModeSouhaite.INDIFFERENT.value
        and formation.mode != preferences.mode_souhaite
    ):
        malus += MODE_MISMATCH_MALUS

    return bonus, malus


def score_tags(preferences: Preferences, formation: Formation) -> float:
    """Bonus when the formation shares any tag with the student's interests."""
    if set(formation.tags) & set(preferences.tags_interets):
        return TAG_MATCH_BONUS
    return 0.0


def score_distance(preferences: Preferences, formation: Formation) -> Tuple[float, float]:
    """(bonus, malus) for formations within half the accepted distance."""
    if formation.distance_km <= preferences.distance_max_km / 2:
        return DISTANCE_BONUS, 0.0
    return 0.0, DISTANCE_MALUS


def top_subjects(
    scores: StudentScores,
    poids: Dict[str, float],
    top: int = POINTS_FORTS_COUNT
) -> List[str]:
    """
    Subjects with the largest grade * weight contribution.
    Ties keep the weight map order.
    """
    ranked = sorted(
        poids.items(),
        key=lambda item: grade_for(scores, item[0]) * item[1],
        reverse=True
    )
    return [subject for subject, _ in ranked[:top]]


def final_score(competence: float, bonus: float, malus: float, penalty: float) -> float:
    return clamp(competence + bonus - malus - penalty, SCORE_MIN, SCORE_MAX)
