"""
Recommendation Engine

Main orchestrator that combines all scoring components into a single pipeline.
This is the primary entry point for generating recommendations.

The engine is pure: it reads only its arguments and the static rule table,
performs no I/O and keeps no state between calls.
"""

import time
from typing import Any, Dict, List, Optional

from .contracts import (
    StudentScores,
    Preferences,
    Formation,
    Recommandation,
    RecommendationOutput,
)
from .candidate_generator import generate_candidates, hard_filter_reason
from .aggregator import batch_aggregate, compute_breakdown
from .classifier import classify_score
from .ranker import rank_recommendations
from .output_assembler import assemble_output
from .constants import ENGINE_VERSION


class RecommendationEngine:
    """
    Scores one student against a list of formations.

    Pipeline flow:
    1. Hard filters - Drop formations without seats, over budget or too far
    2. Dimension scoring - Competence, prerequisites, mode, tags, distance
    3. Aggregation - Combine the terms into a clamped 0-100 score and a tier
    4. Ranking - Stable sort by score, descending
    5. Output assembly - Build the final RecommendationOutput
    """

    def __init__(self):
        self.version = ENGINE_VERSION

    def rank(
        self,
        scores: StudentScores,
        preferences: Preferences,
        formations: List[Formation]
    ) -> List[Recommandation]:
        """
        Ranked recommendations for the formations passing the hard filters.

        Args:
            scores: Student's averaged grades (may be empty)
            preferences: Student's constraints and wishes
            formations: Formations to score, any order

        Returns:
            Recommandation list sorted by score, ties in input order
        """
        candidates, _ = generate_candidates(formations, preferences)
        return rank_recommendations(batch_aggregate(scores, preferences, candidates))

    def recommend(
        self,
        scores: StudentScores,
        preferences: Preferences,
        formations: List[Formation],
        student_id: Optional[str] = None
    ) -> RecommendationOutput:
        """
        Generate recommendations with summary statistics.

        Args:
            scores: Student's averaged grades (may be empty)
            preferences: Student's constraints and wishes
            formations: Formations to score
            student_id: Optional identifier echoed in the output

        Returns:
            RecommendationOutput with ranked recommendations
        """
        start_time = time.perf_counter()

        # Step 1: Hard filters
        candidates, filtered_out = generate_candidates(formations, preferences)

        # Step 2 & 3: Score and aggregate
        scored = batch_aggregate(scores, preferences, candidates)

        # Step 4: Rank
        ranked = rank_recommendations(scored)

        # Step 5: Assemble output
        processing_time = (time.perf_counter() - start_time) * 1000

        return assemble_output(
            scores=scores,
            ranked=ranked,
            total_evaluated=len(formations),
            filtered_out=filtered_out,
            student_id=student_id,
            processing_time_ms=round(processing_time, 2),
        )

    def score_single_formation(
        self,
        scores: StudentScores,
        preferences: Preferences,
        formation: Formation
    ) -> Dict[str, Any]:
        """
        Score a single formation with its full term breakdown.

        Useful for explaining one specific wish to the student. Hard filters
        are reported, not applied.

        Returns:
            Dict with scoring details
        """
        breakdown = compute_breakdown(scores, preferences, formation)

        return {
            "formation": formation.nom,
            "excluded_by": hard_filter_reason(formation, preferences),
            "competence": round(breakdown.competence, 2),
            "bonus": breakdown.bonus,
            "malus": breakdown.malus,
            "prereq_penalty": round(breakdown.prereq_penalty, 2),
            "score": breakdown.final_score,
            "niveau": classify_score(breakdown.final_score).value,
            "points_forts": breakdown.points_forts,
            "gaps": breakdown.gaps,
        }


# Convenience function for simple usage
def recommend(
    scores: StudentScores,
    preferences: Preferences,
    formations: List[Formation]
) -> List[Recommandation]:
    """
    Ranked recommendations for one student.

    Args:
        scores: Student's averaged grades
        preferences: Student preferences
        formations: Formations to score

    Returns:
        List of Recommandation, best score first
    """
    return RecommendationEngine().rank(scores, preferences, formations)
