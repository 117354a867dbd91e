"""Pydantic schemas for guess submission."""
from pydantic import BaseModel, Field

from app.models.passage import SourceType


class GuessSubmitSchema(BaseModel):
    session_id: str = Field(min_length=1)
    passage_id: int = Field(gt=0)
    guess_source: SourceType
    time_ms: int = Field(default=0, ge=0)  # reported by the client, not verified


class GuessResultSchema(BaseModel):
    correct: bool
    truth: SourceType
    score: int
    streak: int
