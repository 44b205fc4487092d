from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime

from .base import Base


class Grade(Base):
    """One bulletin grade, as written by the student-facing app."""
    __tablename__ = "grades"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), index=True, nullable=False)
    student_pathway = Column(String)
    year_level = Column(String)
    term = Column(String)
    subject_type = Column(String)  # commune / specialite
    subject = Column(String, nullable=False)
    grade = Column(Float, nullable=False)
    class_average = Column(Float)
    lowest_grade = Column(Float)
    highest_grade = Column(Float)
    tech_series = Column(String)
    professional_field = Column(String)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
