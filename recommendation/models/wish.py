from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from .base import Base


class Wish(Base):
    __tablename__ = "wishes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), index=True, nullable=False)
    school_name = Column(String)
    program_name = Column(String)
    city = Column(String)
    status = Column(String, default="pending")  # pending / accepted / rejected
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
