"""
Output Assembler

Wraps the ranked recommendations into the RecommendationOutput contract
and generates the summary counters and warnings.
"""

import logging
import uuid
from typing import Dict, List, Optional

from .contracts import StudentScores, Recommandation, RecommendationOutput
from .classifier import get_niveau_counts
from .constants import Niveau

logger = logging.getLogger(__name__)


def assemble_output(
    scores: StudentScores,
    ranked: List[Recommandation],
    total_evaluated: int,
    filtered_out: Dict[str, int],
    student_id: Optional[str] = None,
    processing_time_ms: Optional[float] = None
) -> RecommendationOutput:
    """
    Assemble the final RecommendationOutput.

    Args:
        scores: Student scores used for the computation
        ranked: Ranked recommendations
        total_evaluated: Number of formations received
        filtered_out: Rejections per hard filter reason
        student_id: Optional student identifier
        processing_time_ms: Processing time in milliseconds

    Returns:
        Complete RecommendationOutput
    """
    niveau_counts = get_niveau_counts(ranked)
    total_recommended = len(ranked) - niveau_counts[Niveau.A_RENFORCER.value]

    warnings = _generate_warnings(scores, ranked, total_evaluated)
    for warning in warnings:
        logger.warning(f"⚠️ {warning}")

    return RecommendationOutput(
        request_id=str(uuid.uuid4()),
        student_id=student_id,
        recommendations=ranked,
        total_candidates_evaluated=total_evaluated,
        total_eligible=len(ranked),
        total_recommended=total_recommended,
        filtered_out=filtered_out,
        niveau_counts=niveau_counts,
        processing_time_ms=processing_time_ms,
        warnings=warnings,
    )


def _generate_warnings(
    scores: StudentScores,
    ranked: List[Recommandation],
    total_evaluated: int
) -> List[str]:
    warnings = []

    if total_evaluated == 0:
        warnings.append("Aucune formation à évaluer.")
    elif not ranked:
        warnings.append(
            "Aucune formation ne respecte vos contraintes de budget, de distance ou de places disponibles."
        )

    if not scores:
        warnings.append(
            "Aucune note enregistrée : les scores de compétences valent 0. Importez vos bulletins."
        )

    return warnings
