"""
Data Adapter for the Scoring Engine

Reads grades and wishes from the hosted tables and transforms raw rows
into engine inputs:
- grade records -> StudentScores (one averaged grade per subject)
- catalog rows / wishes -> Formation (profile derived from the program name)

This is a pure READ + TRANSFORM layer:
- NO scoring logic
- NO ranking
- NO DB writes
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Grade, Wish
from .contracts import GradeRecord, StudentScores, Formation
from .classifier import classify_program
from .constants import (
    SUBJECT_ALIASES,
    CATALOG_NAME_FIELDS,
    CATALOG_DEFAULT_COUT,
    CATALOG_DEFAULT_DISTANCE_KM,
    CATALOG_DEFAULT_MODE,
    CATALOG_DEFAULT_CAPACITE,
)

logger = logging.getLogger(__name__)


# =============================================================================
# GRADES
# =============================================================================

def canonical_subject(subject: str) -> str:
    """Map a bulletin subject label to the short name used by the rule table."""
    subject = subject.strip()
    return SUBJECT_ALIASES.get(subject, subject)


def aggregate_grades(
    records: Iterable[Union[GradeRecord, Mapping[str, Any]]],
    canonical: bool = False
) -> StudentScores:
    """
    Average all grades recorded for each subject.

    Args:
        records: GradeRecord objects or plain dicts with subject/grade keys.
            Dicts are validated, so NaN, infinite or out-of-range grades
            raise pydantic.ValidationError.
        canonical: Merge bulletin labels into rule-table subject names
            (e.g. "LVA (Anglais)" -> "Anglais") before averaging

    Returns:
        Subject -> mean grade rounded to 2 decimals. Subjects never
        recorded are absent.
    """
    by_subject: Dict[str, List[float]] = defaultdict(list)

    for record in records:
        if not isinstance(record, GradeRecord):
            record = GradeRecord(**record)
        subject = canonical_subject(record.subject) if canonical else record.subject
        by_subject[subject].append(record.grade)

    return {
        subject: round(sum(grades) / len(grades), 2)
        for subject, grades in by_subject.items()
    }


def grade_records_from_rows(rows: Iterable[Grade]) -> List[GradeRecord]:
    """
    Convert stored grade rows to GradeRecord, skipping rows that fail validation.
    """
    records: List[GradeRecord] = []
    for row in rows:
        try:
            records.append(GradeRecord(
                subject=row.subject,
                grade=row.grade,
                term=row.term,
                year_level=row.year_level,
                class_average=row.class_average,
                created_at=row.created_at,
            ))
        except ValidationError as e:
            logger.warning(f"⚠️ Ignoring invalid grade {row.id} ({row.subject}={row.grade}): {e.error_count()} error(s)")
    return records


def fetch_grades(db: Session, user_id: str) -> List[Grade]:
    """All grades of one student, most recent first."""
    return list(db.execute(
        select(Grade).where(Grade.user_id == user_id).order_by(Grade.created_at.desc())
    ).scalars().all())


def fetch_student_scores(db: Session, user_id: str) -> StudentScores:
    """
    Fetch a student's grades and aggregate them into StudentScores.
    """
    rows = fetch_grades(db, user_id)
    logger.info(f"📚 Grades fetched for student {user_id}: {len(rows)}")
    return aggregate_grades(grade_records_from_rows(rows), canonical=True)


# =============================================================================
# FORMATIONS
# =============================================================================

def _program_name(row: Mapping[str, Any]) -> str:
    for field in CATALOG_NAME_FIELDS:
        value = row.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def to_formation(row: Mapping[str, Any]) -> Formation:
    """
    Derive a Formation from a catalog row.

    The scoring profile comes from the keyword rule matching the program
    name (tags are the rule keywords). Cost, distance, mode and capacity
    are not in the catalog, so uniform placeholders are used: they always
    pass the budget and distance filters and never block on seats.

    Args:
        row: Catalog row (or wish) holding a program name

    Returns:
        Formation ready for the engine
    """
    name = _program_name(row)
    rule = classify_program(name)

    return Formation(
        nom=name,
        prerequis=dict(rule.prerequis),
        poids=dict(rule.poids),
        cout=CATALOG_DEFAULT_COUT,
        distance_km=CATALOG_DEFAULT_DISTANCE_KM,
        mode=CATALOG_DEFAULT_MODE,
        tags=list(rule.keywords),
        capacite_disponible=CATALOG_DEFAULT_CAPACITE,
    )


def formations_from_catalog(rows: Iterable[Mapping[str, Any]]) -> List[Formation]:
    return [to_formation(row) for row in rows]


def fetch_wishes(db: Session, user_id: str) -> List[Wish]:
    """All wishes of one student, most recent first."""
    return list(db.execute(
        select(Wish).where(Wish.user_id == user_id).order_by(Wish.created_at.desc())
    ).scalars().all())


def formations_from_wishes(wishes: Iterable[Wish]) -> List[Formation]:
    """Derive one Formation per saved wish from its program name."""
    return [
        to_formation({"program_name": wish.program_name})
        for wish in wishes
    ]
