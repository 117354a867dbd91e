"""Pydantic schemas for per-user stats."""
from datetime import datetime

from pydantic import BaseModel


class UserStatsOutSchema(BaseModel):
    user_id: str
    games_played: int = 0
    total_questions: int = 0
    correct: int = 0
    streak_best: int = 0
    last_played_at: datetime | None = None
    accuracy: float = 0.0

    class Config:
        from_attributes = True
