"""
Engine Runner

Orchestrates the recommendation pipeline for a stored student:
1. Fetches the student's grades via adapter and averages them
2. Builds formations from catalog rows, or from the student's saved wishes
3. Runs recommendation engine
4. Returns ranked recommendations

This is a pure orchestration layer - NO scoring, NO business logic.
"""

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.orm import Session

from .adapter import (
    fetch_student_scores,
    fetch_wishes,
    formations_from_catalog,
    formations_from_wishes,
)
from .contracts import Preferences, RecommendationOutput
from .engine import RecommendationEngine

logger = logging.getLogger(__name__)


def run_recommendations(
    db: Session,
    user_id: str,
    preferences: Preferences,
    catalog_rows: Optional[List[Mapping[str, Any]]] = None
) -> RecommendationOutput:
    """
    Main entry point: run full recommendation pipeline for a stored student.

    Args:
        db: Database session
        user_id: Owner of the grades and wishes
        preferences: Student preferences
        catalog_rows: Catalog rows to score; the student's wishes when None

    Returns:
        RecommendationOutput with ranked recommendations
    """
    logger.info(f"🚀 Starting recommendation pipeline for student: {user_id}")

    # Step 1: Grades
    scores = fetch_student_scores(db, user_id)
    logger.info(f"📊 Subjects with an average: {len(scores)}")

    # Step 2: Formations
    if catalog_rows is None:
        wishes = fetch_wishes(db, user_id)
        logger.info(f"🎯 Scoring saved wishes: {len(wishes)}")
        formations = formations_from_wishes(wishes)
    else:
        logger.info(f"📦 Scoring catalog rows: {len(catalog_rows)}")
        formations = formations_from_catalog(catalog_rows)

    # Step 3: Engine
    output = RecommendationEngine().recommend(
        scores, preferences, formations, student_id=user_id
    )

    logger.info(f"✅ Recommendations returned: {len(output.recommendations)}")
    return output
