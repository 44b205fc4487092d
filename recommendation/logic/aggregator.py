"""
Score Aggregator

Combines the individual scoring terms into a final, clamped score
and builds the Recommandation for one formation.
"""

from typing import List

from .contracts import (
    StudentScores,
    Preferences,
    Formation,
    Recommandation,
    ScoreBreakdown,
)
from .dimension_scorers import (
    score_competence,
    score_prerequisites,
    score_mode,
    score_tags,
    score_distance,
    top_subjects,
    final_score,
)
from .classifier import classify_score


def compute_breakdown(
    scores: StudentScores,
    preferences: Preferences,
    formation: Formation
) -> ScoreBreakdown:
    """
    Compute every scoring term for one formation.

    Args:
        scores: Student's averaged grades
        preferences: Student's constraints and wishes
        formation: Formation to score (hard filters already applied)

    Returns:
        ScoreBreakdown with the final score and explanatory fields
    """
    competence = score_competence(scores, formation)
    penalty, gaps = score_prerequisites(scores, formation)

    bonus = 0.0
    malus = 0.0

    mode_bonus, mode_malus = score_mode(preferences, formation)
    bonus += mode_bonus
    malus += mode_malus

    bonus += score_tags(preferences, formation)

    distance_bonus, distance_malus = score_distance(preferences, formation)
    bonus += distance_bonus
    malus += distance_malus

    return ScoreBreakdown(
        competence=competence,
        bonus=bonus,
        malus=malus,
        prereq_penalty=penalty,
        final_score=final_score(competence, bonus, malus, penalty),
        points_forts=top_subjects(scores, formation.poids),
        gaps=gaps,
    )


def aggregate_scores(
    scores: StudentScores,
    preferences: Preferences,
    formation: Formation
) -> Recommandation:
    """Score one formation and wrap the result as a Recommandation."""
    breakdown = compute_breakdown(scores, preferences, formation)

    return Recommandation(
        formation=formation.nom,
        score=breakdown.final_score,
        niveau=classify_score(breakdown.final_score),
        points_forts=breakdown.points_forts,
        gaps=breakdown.gaps,
        mode=formation.mode,
        cout=formation.cout,
        distance_km=formation.distance_km,
    )


def batch_aggregate(
    scores: StudentScores,
    preferences: Preferences,
    formations: List[Formation]
) -> List[Recommandation]:
    """Score multiple formations, keeping input order."""
    return [aggregate_scores(scores, preferences, f) for f in formations]
