"""
Ranker

Orders recommendations by final score.
"""

from typing import List

from .contracts import Recommandation


def rank_recommendations(recommendations: List[Recommandation]) -> List[Recommandation]:
    """
    Rank recommendations by score (descending).

    sorted() is stable with reverse=True, so equal scores keep their
    input order.

    Args:
        recommendations: Scored recommendations in input order

    Returns:
        New sorted list; the input list is left untouched
    """
    return sorted(recommendations, key=lambda r: r.score, reverse=True)
