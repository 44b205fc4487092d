"""
Scoring Engine Constants

Defines the bonus/malus values, tier thresholds, placeholder profile defaults
and the keyword rule table used to derive a formation profile from its name.
All values are deterministic with no AI/ML components.
"""

from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, Field


# =============================================================================
# GRADE SCALE
# =============================================================================

GRADE_MIN = 0.0
GRADE_MAX = 20.0

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# =============================================================================
# BONUS / MALUS
# =============================================================================

MODE_MATCH_BONUS = 5.0
MODE_MISMATCH_MALUS = 3.0
TAG_MATCH_BONUS = 5.0
DISTANCE_BONUS = 2.0
DISTANCE_MALUS = 2.0

# Maximum penalty per unmet prerequisite subject
PREREQUISITE_PENALTY_MAX = 15.0

# Number of subjects reported as strong points
POINTS_FORTS_COUNT = 2

# =============================================================================
# DELIVERY MODES
# =============================================================================

class DeliveryMode(str, Enum):
    """How a formation is taught."""
    PRESENTIEL = "presentiel"
    DISTANCIEL = "distanciel"
    MIXTE = "mixte"


class ModeSouhaite(str, Enum):
    """Delivery mode wished by the student."""
    PRESENTIEL = "presentiel"
    DISTANCIEL = "distanciel"
    MIXTE = "mixte"
    INDIFFERENT = "indifferent"


# =============================================================================
# TIER THRESHOLDS
# =============================================================================

class Niveau(str, Enum):
    """Qualitative tier bucketing the final score."""
    FORTEMENT_RECOMMANDE = "Fortement recommandé"
    ADAPTE = "Adapté"
    A_RENFORCER = "À renforcer"


# Lower bounds, inclusive, checked from highest to lowest
NIVEAU_THRESHOLDS: Tuple[Tuple[Niveau, float], ...] = (
    (Niveau.FORTEMENT_RECOMMANDE, 75.0),
    (Niveau.ADAPTE, 50.0),
)

# =============================================================================
# HARD FILTER REASONS
# =============================================================================

FILTER_NO_CAPACITY = "no_capacity"
FILTER_OVER_BUDGET = "over_budget"
FILTER_TOO_FAR = "too_far"

# =============================================================================
# CATALOG PLACEHOLDER DEFAULTS
# =============================================================================

# The public catalog carries neither cost, distance nor capacity
CATALOG_DEFAULT_COUT = 0.0
CATALOG_DEFAULT_DISTANCE_KM = 10.0
CATALOG_DEFAULT_MODE = DeliveryMode.PRESENTIEL
CATALOG_DEFAULT_CAPACITE = 100

# Columns holding the program name, checked in order
CATALOG_NAME_FIELDS: Tuple[str, ...] = (
    "Nom long de la formation",
    "program_name",
    "nom",
)

# =============================================================================
# SUBJECT ALIASES
# =============================================================================

# Bulletin subject labels -> short names used by the rule table
SUBJECT_ALIASES: Dict[str, str] = {
    "LVA (Anglais)": "Anglais",
    "LVA": "Anglais",
    "NSI (Numérique et Sciences Informatiques)": "NSI",
    "SNT (Sciences Numériques et Technologie)": "NSI",
    "SES (Sciences Économiques et Sociales)": "SES",
    "SVT (Sciences de la Vie et de la Terre)": "SVT",
    "Biologie-Écologie (lycées agricoles)": "SVT",
    "Sciences de l'Ingénieur": "Physique-Chimie",
    "Arts (Plastiques, Musique, Théâtre, Cinéma-Audiovisuel, Danse, Histoire des Arts)": "Arts",
    "Arts Appliqués et Cultures Artistiques": "Arts",
    "Économie-Gestion": "SES",
}

# =============================================================================
# PROGRAM RULES
# =============================================================================

class ProgramRule(BaseModel):
    """Keyword rule mapping a free-text program name to a scoring profile."""
    name: str
    keywords: Tuple[str, ...] = ()
    prerequis: Dict[str, float] = Field(default_factory=dict)
    poids: Dict[str, float] = Field(default_factory=dict)

    class Config:
        frozen = True


# First match wins: order matters when several keyword sets could match
PROGRAM_RULES: Tuple[ProgramRule, ...] = (
    ProgramRule(
        name="ingenierie",
        keywords=(
            "ingénieur", "ingénierie", "génie", "math", "physique",
            "mécanique", "électronique", "cpge", "mpsi", "pcsi",
        ),
        prerequis={"Mathématiques": 12, "Physique-Chimie": 11},
        poids={"Mathématiques": 0.45, "Physique-Chimie": 0.35, "Anglais": 0.2},
    ),
    ProgramRule(
        name="data",
        keywords=(
            "informatique", "data", "donnée", "numérique", "intelligence artificielle",
            "développement", "réseaux", "miashs",
        ),
        prerequis={"Mathématiques": 12, "NSI": 10},
        poids={"Mathématiques": 0.5, "NSI": 0.3, "Anglais": 0.2},
    ),
    ProgramRule(
        name="commerce",
        keywords=(
            "commerce", "gestion", "management", "économie", "marketing",
            "finance", "comptabilité", "business",
        ),
        prerequis={"Mathématiques": 10, "SES": 10},
        poids={"SES": 0.35, "Mathématiques": 0.25, "Français": 0.2, "Anglais": 0.2},
    ),
    ProgramRule(
        name="sante",
        keywords=(
            "santé", "médecine", "biologie", "infirmier", "pharmacie",
            "kinésithérapie", "paramédical", "sage-femme",
        ),
        prerequis={"SVT": 12, "Physique-Chimie": 11},
        poids={"SVT": 0.45, "Physique-Chimie": 0.3, "Mathématiques": 0.25},
    ),
    ProgramRule(
        name="design",
        keywords=(
            "design", "arts", "graphisme", "architecture", "audiovisuel",
            "cinéma", "métiers d'art", "animation",
        ),
        prerequis={"Arts": 10, "Français": 10},
        poids={"Arts": 0.5, "Français": 0.3, "Anglais": 0.2},
    ),
)

DEFAULT_RULE = ProgramRule(
    name="default",
    keywords=(),
    prerequis={"Mathématiques": 10, "Anglais": 10},
    poids={"Mathématiques": 0.6, "Anglais": 0.4},
)

ENGINE_VERSION = "1.0.0"
