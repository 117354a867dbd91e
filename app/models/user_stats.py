"""UserStats model: per-user totals, maintained incrementally on every guess."""
from sqlalchemy import Column, DateTime, Integer, String

from app.db.session import Base


class UserStats(Base):
    __tablename__ = "user_stats"

    user_id = Column(String(255), primary_key=True)
    games_played = Column(Integer, nullable=False, default=0)
    total_questions = Column(Integer, nullable=False, default=0)
    correct = Column(Integer, nullable=False, default=0)
    streak_best = Column(Integer, nullable=False, default=0)  # high-water mark, never decreases
    last_played_at = Column(DateTime(timezone=True), nullable=True)
