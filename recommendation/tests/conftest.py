"""
Shared fixtures: an in-memory SQLite grade store and an API client bound to it.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import Base, get_db
from recommendation.models import Grade, Wish
from recommendation.logic import Preferences


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def seeded_db(db_session):
    """Student u1: two maths grades, one english grade, one data wish. Student u2: noise."""
    db_session.add_all([
        Grade(user_id="u1", subject="Mathématiques", grade=14, term="Trimestre 1"),
        Grade(user_id="u1", subject="Mathématiques", grade=16, term="Trimestre 2"),
        Grade(user_id="u1", subject="LVA (Anglais)", grade=12, term="Trimestre 1"),
        Grade(user_id="u2", subject="Mathématiques", grade=4, term="Trimestre 1"),
        Wish(user_id="u1", school_name="Université de Lille", program_name="Licence Informatique", city="Lille"),
        Wish(user_id="u2", school_name="ESSEC", program_name="Programme Grande École - Management", city="Cergy"),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def client(db_session):
    from main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def preferences():
    return Preferences(
        budget_max=8000,
        distance_max_km=30,
        mode_souhaite="presentiel",
        tags_interets=["data"],
    )
