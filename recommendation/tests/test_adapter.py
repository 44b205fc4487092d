"""
Test grade aggregation and the DB-backed runner.
"""

import math

import pytest
from pydantic import ValidationError

from recommendation.logic import aggregate_grades, GradeRecord, Niveau
from recommendation.logic.adapter import (
    canonical_subject,
    fetch_grades,
    fetch_student_scores,
    fetch_wishes,
)
from recommendation.logic.runner import run_recommendations
from recommendation.models import Grade


# =============================================================================
# AGGREGATION
# =============================================================================

def test_aggregate_averages_per_subject():
    records = [{"subject": "Maths", "grade": 14}, {"subject": "Maths", "grade": 16}]
    assert aggregate_grades(records) == {"Maths": 15}


def test_aggregate_rounds_to_two_decimals():
    records = [
        {"subject": "Français", "grade": 12},
        {"subject": "Français", "grade": 13},
        {"subject": "Français", "grade": 13},
        {"subject": "SVT", "grade": 9.5},
    ]
    assert aggregate_grades(records) == {"Français": 12.67, "SVT": 9.5}


def test_aggregate_accepts_grade_records():
    records = [GradeRecord(subject="NSI", grade=18), GradeRecord(subject="NSI", grade=10)]
    assert aggregate_grades(records) == {"NSI": 14}


def test_aggregate_of_nothing_is_empty():
    assert aggregate_grades([]) == {}


@pytest.mark.parametrize("grade", [math.nan, math.inf, -1, 20.5])
def test_invalid_grades_are_rejected(grade):
    with pytest.raises(ValidationError):
        aggregate_grades([{"subject": "Maths", "grade": grade}])


def test_empty_subject_is_rejected():
    with pytest.raises(ValidationError):
        aggregate_grades([{"subject": "", "grade": 10}])


def test_canonical_subjects_are_merged():
    records = [
        {"subject": "LVA (Anglais)", "grade": 12},
        {"subject": "Anglais", "grade": 14},
    ]
    assert aggregate_grades(records) == {"LVA (Anglais)": 12, "Anglais": 14}
    assert aggregate_grades(records, canonical=True) == {"Anglais": 13}


def test_canonical_subject_keeps_unknown_labels():
    assert canonical_subject("Philosophie") == "Philosophie"
    assert canonical_subject(" SVT (Sciences de la Vie et de la Terre) ") == "SVT"


# =============================================================================
# GRADE STORE
# =============================================================================

def test_fetch_only_owned_rows(seeded_db):
    assert len(fetch_grades(seeded_db, "u1")) == 3
    assert [w.program_name for w in fetch_wishes(seeded_db, "u1")] == ["Licence Informatique"]
    assert fetch_grades(seeded_db, "nobody") == []


def test_rows_get_a_creation_date(seeded_db):
    grade = fetch_grades(seeded_db, "u1")[0]
    wish = fetch_wishes(seeded_db, "u1")[0]
    assert grade.created_at is not None
    assert wish.created_at is not None


def test_fetch_student_scores(seeded_db):
    assert fetch_student_scores(seeded_db, "u1") == {"Mathématiques": 15, "Anglais": 12}


def test_invalid_stored_grade_is_skipped(seeded_db):
    seeded_db.add(Grade(user_id="u1", subject="Mathématiques", grade=42))
    seeded_db.commit()
    assert fetch_student_scores(seeded_db, "u1") == {"Mathématiques": 15, "Anglais": 12}


# =============================================================================
# RUNNER
# =============================================================================

def test_runner_scores_saved_wishes(seeded_db, preferences):
    output = run_recommendations(seeded_db, "u1", preferences)

    assert output.student_id == "u1"
    assert output.total_candidates_evaluated == 1
    rec = output.recommendations[0]
    assert rec.formation == "Licence Informatique"
    # Maths 37.5 + Anglais 12, bonuses 12, NSI missing: penalty 15
    assert rec.score == pytest.approx(46.5)
    assert rec.gaps == ["NSI"]
    assert rec.niveau == Niveau.A_RENFORCER


def test_runner_scores_catalog_rows(seeded_db, preferences):
    rows = [
        {"Nom long de la formation": "Licence Histoire"},
        {"Nom long de la formation": "Licence Informatique"},
    ]
    output = run_recommendations(seeded_db, "u1", preferences, catalog_rows=rows)

    # Default rule: 45 + 24 + mode 5 + distance 2
    assert [r.formation for r in output.recommendations] == ["Licence Histoire", "Licence Informatique"]
    assert output.recommendations[0].score == pytest.approx(76.0)


def test_runner_student_without_grades(seeded_db, preferences):
    output = run_recommendations(seeded_db, "nobody", preferences, catalog_rows=[])
    assert output.recommendations == []
    assert len(output.warnings) == 2