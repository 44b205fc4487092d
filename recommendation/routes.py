"""
Recommendation API Routes

Exposes the compatibility-scoring engine via REST API.
"""

import logging
from typing import Optional, List, Dict, Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import get_db
from .display import display_score
from .logic.adapter import aggregate_grades, formations_from_catalog
from .logic.classifier import classify_all
from .logic.contracts import Preferences, Formation, Recommandation, RecommendationOutput
from .logic.engine import RecommendationEngine
from .logic.runner import run_recommendations

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class RecommendationRequest(BaseModel):
    """Request body for the stateless recommendations endpoint."""
    scores: Optional[Dict[str, float]] = Field(
        default=None,
        description="Averaged grades per subject (0-20)"
    )
    grades: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Raw grade records {subject, grade}; averaged per subject. Takes precedence over scores"
    )
    preferences: Dict[str, Any] = Field(
        ...,
        description="Budget, distance, wished mode and interest tags",
        examples=[{
            "budgetMax": 8000,
            "distanceMaxKm": 30,
            "modeSouhaite": "presentiel",
            "tagsInterets": ["data"],
        }]
    )
    formations: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Fully described formations"
    )
    catalog_rows: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Catalog rows; the profile is derived from the program name"
    )
    display_bias: bool = Field(
        default=False,
        description="Include the cosmetic displayScore for each recommendation"
    )


class StudentRecommendationRequest(BaseModel):
    """Request body for a stored student."""
    preferences: Dict[str, Any]
    catalog_rows: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Catalog rows to score; the student's saved wishes when omitted"
    )
    display_bias: bool = False


class ScoreFormationRequest(BaseModel):
    scores: Dict[str, float] = Field(default_factory=dict)
    preferences: Dict[str, Any]
    formation: Dict[str, Any]


class ClassifyRequest(BaseModel):
    program_names: List[str] = Field(..., min_length=1)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("", summary="Score formations for a student")
@router.post("/", summary="Score formations for a student", include_in_schema=False)
def get_recommendations(request: RecommendationRequest):
    """
    Rank formations by compatibility with the given grades and preferences.

    **Request Body:**
    - `scores` or `grades`: the student's grades
    - `preferences`: budget, distance, wished mode, interest tags
    - `formations` and/or `catalog_rows`: what to score

    **Response:**
    - Summary counters and the ranked recommendations
    """
    preferences = _parse_preferences(request.preferences)

    try:
        if request.grades is not None:
            scores = aggregate_grades(request.grades)
        else:
            scores = request.scores or {}
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid grades: {str(e)}")

    try:
        formations = [Formation(**f) for f in request.formations]
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid formation: {str(e)}")
    formations.extend(formations_from_catalog(request.catalog_rows))

    output = RecommendationEngine().recommend(scores, preferences, formations)
    return _serialize_output(output, request.display_bias)


@router.post("/students/{user_id}", summary="Score formations for a stored student")
def get_student_recommendations(
    user_id: str,
    request: StudentRecommendationRequest,
    db: Session = Depends(get_db)
):
    """
    Run the pipeline on the student's stored grades, against the given
    catalog rows or the student's saved wishes.
    """
    preferences = _parse_preferences(request.preferences)

    try:
        output = run_recommendations(db, user_id, preferences, request.catalog_rows)
    except SQLAlchemyError as e:
        logger.error(f"❌ Grade store error for student {user_id}: {e}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": f"Database error: {str(e)}"},
        )

    return _serialize_output(output, request.display_bias)


@router.post("/score", summary="Detailed score of one formation")
def score_formation(request: ScoreFormationRequest):
    preferences = _parse_preferences(request.preferences)
    try:
        formation = Formation(**request.formation)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid formation: {str(e)}")

    return RecommendationEngine().score_single_formation(request.scores, preferences, formation)


@router.post("/classify", summary="Scoring profile derived from program names")
def classify_programs(request: ClassifyRequest):
    return [
        {
            "program_name": name,
            "rule": rule.name,
            "prerequis": rule.prerequis,
            "poids": rule.poids,
            "tags": list(rule.keywords),
        }
        for name, rule in classify_all(request.program_names)
    ]


def _parse_preferences(data: Dict[str, Any]) -> Preferences:
    try:
        return Preferences(**data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid preferences: {str(e)}")


def _serialize_output(output: RecommendationOutput, with_bias: bool) -> Dict[str, Any]:
    return {
        "request_id": output.request_id,
        "student_id": output.student_id,
        "summary": {
            "total_evaluated": output.total_candidates_evaluated,
            "total_eligible": output.total_eligible,
            "total_recommended": output.total_recommended,
            "filtered_out": output.filtered_out,
            "niveau_counts": output.niveau_counts,
            "processing_time_ms": output.processing_time_ms,
        },
        "recommendations": [_serialize_recommendation(r, with_bias) for r in output.recommendations],
        "warnings": output.warnings,
        "engine_version": output.engine_version,
    }


def _serialize_recommendation(rec: Recommandation, with_bias: bool) -> Dict[str, Any]:
    """Convert Recommandation to JSON-serializable dict."""
    data = {
        "formation": rec.formation,
        "score": round(rec.score, 2),
        "niveau": rec.niveau,
        "pointsForts": rec.points_forts,
        "gaps": rec.gaps,
        "mode": rec.mode,
        "cout": rec.cout,
        "distanceKm": rec.distance_km,
    }
    if with_bias:
        data["displayScore"] = round(display_score(rec.score, rec.formation), 2)
    return data


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Recommendation engine health check")
def health_check():
    """Check if recommendation engine is operational."""
    return {"status": "ok", "engine": "compatibility", "version": RecommendationEngine().version}
