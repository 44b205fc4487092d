"""
Candidate Generator

Applies the hard filters (seats, budget, distance) to the formations
before scoring. A formation failing any filter contributes no output.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .contracts import Preferences, Formation
from .constants import FILTER_NO_CAPACITY, FILTER_OVER_BUDGET, FILTER_TOO_FAR

logger = logging.getLogger(__name__)


def hard_filter_reason(formation: Formation, preferences: Preferences) -> Optional[str]:
    """
    First hard filter a formation fails, or None when it passes all of them.
    """
    if formation.capacite_disponible <= 0:
        return FILTER_NO_CAPACITY
    if formation.cout > preferences.budget_max:
        return FILTER_OVER_BUDGET
    if formation.distance_km > preferences.distance_max_km:
        return FILTER_TOO_FAR
    return None


def generate_candidates(
    formations: List[Formation],
    preferences: Preferences
) -> Tuple[List[Formation], Dict[str, int]]:
    """
    Keep the formations that pass every hard filter.

    Args:
        formations: Formations to consider, in input order
        preferences: Student's constraints

    Returns:
        (surviving formations in input order, count of rejections per reason)
    """
    candidates: List[Formation] = []
    rejected = {FILTER_NO_CAPACITY: 0, FILTER_OVER_BUDGET: 0, FILTER_TOO_FAR: 0}

    for formation in formations:
        reason = hard_filter_reason(formation, preferences)
        if reason is not None:
            logger.debug(f"Skipping formation '{formation.nom}': {reason}")
            rejected[reason] += 1
            continue
        candidates.append(formation)

    logger.info(
        f"🔍 Hard filters: {len(candidates)}/{len(formations)} formations kept "
        f"(no seats={rejected[FILTER_NO_CAPACITY]}, over budget={rejected[FILTER_OVER_BUDGET]}, "
        f"too far={rejected[FILTER_TOO_FAR]})"
    )

    return candidates, rejected
