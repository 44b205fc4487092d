"""
Test the recommendation API and the display bias.
"""

import pytest

from recommendation.display import name_bias, display_score


PREFERENCES = {
    "budgetMax": 8000,
    "distanceMaxKm": 30,
    "modeSouhaite": "presentiel",
    "tagsInterets": ["data"],
}

LICENCE_DATA = {
    "nom": "Licence Data",
    "prerequis": {"Mathématiques": 12},
    "poids": {"Mathématiques": 0.6, "Anglais": 0.4},
    "cout": 7000,
    "distanceKm": 10,
    "mode": "presentiel",
    "tags": ["data"],
    "capaciteDisponible": 25,
}


# =============================================================================
# DISPLAY BIAS
# =============================================================================

def test_name_bias_is_a_pure_function_of_the_name():
    assert name_bias("Licence Data") == -1
    assert name_bias("Licence Data") == name_bias("Licence Data")
    assert name_bias("") == -4


def test_name_bias_range():
    for name in ["A", "Licence Informatique", "BUT GEA", "Médecine", "x" * 50]:
        assert -4 <= name_bias(name) <= 4


def test_display_score_is_clamped():
    assert display_score(87, "Licence Data") == 86
    assert display_score(100, "A") == 98   # 65 % 9 - 4
    assert display_score(100, "P") == 100  # +4, clamped
    assert display_score(0, "") == 0       # -4, clamped


# =============================================================================
# STATELESS ENDPOINT
# =============================================================================

def test_recommendations_endpoint(client):
    response = client.post("/recommendations", json={
        "scores": {"Mathématiques": 17, "Anglais": 12},
        "preferences": PREFERENCES,
        "formations": [LICENCE_DATA, {**LICENCE_DATA, "nom": "Licence Pleine", "capaciteDisponible": 0}],
    })
    assert response.status_code == 200

    body = response.json()
    assert body["summary"]["total_evaluated"] == 2
    assert body["summary"]["total_eligible"] == 1
    assert body["summary"]["filtered_out"]["no_capacity"] == 1

    rec = body["recommendations"][0]
    assert rec["formation"] == "Licence Data"
    assert rec["score"] == pytest.approx(87.0)
    assert rec["niveau"] == "Fortement recommandé"
    assert rec["pointsForts"] == ["Mathématiques", "Anglais"]
    assert rec["gaps"] == []
    assert rec["distanceKm"] == 10
    assert "displayScore" not in rec


def test_recommendations_endpoint_with_grades_and_catalog(client):
    response = client.post("/recommendations", json={
        "grades": [
            {"subject": "Mathématiques", "grade": 14},
            {"subject": "Mathématiques", "grade": 16},
            {"subject": "Anglais", "grade": 12},
        ],
        "preferences": PREFERENCES,
        "catalog_rows": [{"Nom long de la formation": "Licence Histoire"}],
        "display_bias": True,
    })
    assert response.status_code == 200

    rec = response.json()["recommendations"][0]
    assert rec["score"] == pytest.approx(76.0)
    assert rec["displayScore"] == pytest.approx(display_score(76.0, "Licence Histoire"))


def test_invalid_preferences_return_400(client):
    response = client.post("/recommendations", json={
        "scores": {},
        "preferences": {**PREFERENCES, "modeSouhaite": "bus"},
        "formations": [LICENCE_DATA],
    })
    assert response.status_code == 400


def test_invalid_grades_return_400(client):
    response = client.post("/recommendations", json={
        "grades": [{"subject": "Mathématiques", "grade": 25}],
        "preferences": PREFERENCES,
    })
    assert response.status_code == 400


def test_invalid_formation_returns_400(client):
    response = client.post("/recommendations", json={
        "preferences": PREFERENCES,
        "formations": [{**LICENCE_DATA, "cout": -1}],
    })
    assert response.status_code == 400


@pytest.mark.parametrize("bad", [
    {"poids": {"Mathématiques": -1.0, "Anglais": 0.5}},
    {"prerequis": {"Anglais": 35}},
])
def test_invalid_weights_or_thresholds_return_400(client, bad):
    formation = {**LICENCE_DATA, **bad}

    response = client.post("/recommendations", json={
        "preferences": PREFERENCES,
        "formations": [formation],
    })
    assert response.status_code == 400

    response = client.post("/recommendations/score", json={
        "preferences": PREFERENCES,
        "formation": formation,
    })
    assert response.status_code == 400


def test_score_endpoint(client):
    response = client.post("/recommendations/score", json={
        "scores": {"Mathématiques": 17, "Anglais": 12},
        "preferences": PREFERENCES,
        "formation": LICENCE_DATA,
    })
    assert response.status_code == 200
    body = response.json()
    assert body["competence"] == pytest.approx(75.0)
    assert body["bonus"] == pytest.approx(12.0)
    assert body["excluded_by"] is None


def test_classify_endpoint(client):
    response = client.post("/recommendations/classify", json={
        "program_names": ["Licence Informatique", "Licence Histoire"],
    })
    assert response.status_code == 200
    assert [r["rule"] for r in response.json()] == ["data", "default"]


# =============================================================================
# STORED STUDENT ENDPOINT
# =============================================================================

def test_student_endpoint_scores_wishes(client, seeded_db):
    response = client.post("/recommendations/students/u1", json={"preferences": PREFERENCES})
    assert response.status_code == 200

    body = response.json()
    assert body["student_id"] == "u1"
    assert [r["formation"] for r in body["recommendations"]] == ["Licence Informatique"]
    assert body["recommendations"][0]["gaps"] == ["NSI"]


def test_student_endpoint_with_catalog_rows(client, seeded_db):
    response = client.post("/recommendations/students/u2", json={
        "preferences": PREFERENCES,
        "catalog_rows": [{"Nom long de la formation": "Licence Histoire"}],
    })
    assert response.status_code == 200
    assert response.json()["recommendations"][0]["formation"] == "Licence Histoire"


def test_health(client):
    response = client.get("/recommendations/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_student_endpoint_without_database_returns_503(client, monkeypatch):
    import db

    monkeypatch.setattr(db, "engine", None)
    client.app.dependency_overrides.clear()

    response = client.post("/recommendations/students/u1", json={"preferences": PREFERENCES})
    assert response.status_code == 503
    assert response.json()["status"] == "error"
    assert "DATABASE_URL" in response.json()["message"]
