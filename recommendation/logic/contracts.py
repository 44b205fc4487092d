"""
Data Contracts for the Compatibility Scoring Engine

Defines Pydantic models for the engine inputs (Preferences, Formation,
GradeRecord) and outputs (Recommandation, RecommendationOutput).
These contracts are the API boundary for the scoring engine.
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, Field

from .constants import DeliveryMode, ModeSouhaite, Niveau, ENGINE_VERSION


# Subject name -> grade on the 0-20 scale. Unrecorded subjects are absent.
StudentScores = Dict[str, float]

# Minimum grade on the 0-20 scale, and a non-negative subject weight.
Threshold = Annotated[float, Field(ge=0.0, le=20.0, allow_inf_nan=False)]
Weight = Annotated[float, Field(ge=0.0, allow_inf_nan=False)]


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class GradeRecord(BaseModel):
    """
    One recorded grade, as stored by the grade store.

    This is the validation boundary for grades: non-finite or out-of-range
    values are rejected here, before they can reach the engine.
    """
    subject: str = Field(min_length=1)
    grade: float = Field(ge=0.0, le=20.0, allow_inf_nan=False)

    # Bulletin context (optional, not used by scoring)
    term: Optional[str] = None
    year_level: Optional[str] = None
    class_average: Optional[float] = None
    created_at: Optional[datetime] = None


class Preferences(BaseModel):
    """
    Student constraints and wishes, immutable for one computation.
    """
    budget_max: float = Field(ge=0.0, alias="budgetMax")
    distance_max_km: float = Field(ge=0.0, alias="distanceMaxKm")
    mode_souhaite: ModeSouhaite = Field(alias="modeSouhaite")
    localisation: Optional[str] = None  # informative only
    tags_interets: List[str] = Field(default_factory=list, alias="tagsInterets")

    class Config:
        use_enum_values = True
        populate_by_name = True
        frozen = True


class Formation(BaseModel):
    """
    Scoring profile of one school program.
    Either supplied directly or derived from a catalog row.
    """
    nom: str
    prerequis: Dict[str, Threshold] = Field(default_factory=dict)  # subject -> minimum grade
    poids: Dict[str, Weight] = Field(default_factory=dict)         # subject -> weight, sum ~ 1
    cout: float = Field(ge=0.0)
    distance_km: float = Field(ge=0.0, alias="distanceKm")
    mode: DeliveryMode
    tags: List[str] = Field(default_factory=list)
    capacite_disponible: int = Field(alias="capaciteDisponible")  # remaining seats

    class Config:
        use_enum_values = True
        populate_by_name = True


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class Recommandation(BaseModel):
    """
    Engine output for a single formation.
    """
    formation: str
    score: float = Field(ge=0.0, le=100.0)
    niveau: Niveau
    points_forts: List[str] = Field(default_factory=list, alias="pointsForts")
    gaps: List[str] = Field(default_factory=list)

    # Pass-through
    mode: DeliveryMode
    cout: float
    distance_km: float = Field(alias="distanceKm")

    class Config:
        use_enum_values = True
        populate_by_name = True
        frozen = True


class RecommendationOutput(BaseModel):
    """
    Ranked recommendations with summary statistics.
    """
    # Request tracking
    request_id: Optional[str] = None
    student_id: Optional[str] = None

    # All recommendations (ranked)
    recommendations: List[Recommandation] = Field(default_factory=list)

    # Summary Statistics
    total_candidates_evaluated: int = 0
    total_eligible: int = 0
    total_recommended: int = 0
    filtered_out: Dict[str, int] = Field(default_factory=dict)
    niveau_counts: Dict[str, int] = Field(default_factory=dict)

    # Processing metadata
    processing_time_ms: Optional[float] = None
    engine_version: str = ENGINE_VERSION

    # Warnings/Notes
    warnings: List[str] = Field(default_factory=list)


# =============================================================================
# INTERMEDIATE DATA STRUCTURES
# =============================================================================

class ScoreBreakdown(BaseModel):
    """
    Term-by-term decomposition of one formation's score.
    Used between the dimension scorers and output assembly.
    """
    competence: float = 0.0
    bonus: float = 0.0
    malus: float = 0.0
    prereq_penalty: float = 0.0
    final_score: float = 0.0
    points_forts: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
