"""Pydantic schemas for starting, ending and inspecting sessions."""
from datetime import datetime

from pydantic import BaseModel, Field


class StartSessionSchema(BaseModel):
    category_filter: list[int] | None = None  # null or empty = all categories


class StartSessionOutSchema(BaseModel):
    session_id: str


class SessionRefSchema(BaseModel):
    session_id: str = Field(min_length=1)


class SessionStatsOutSchema(BaseModel):
    session_id: str
    status: str
    score: int
    streak: int
    questions_answered: int
    accuracy: float = 0.0
    avg_time_ms: int = 0
    rating: str = "incomplete"

    class Config:
        from_attributes = True


class SessionHistoryItemSchema(SessionStatsOutSchema):
    category_filter: list[int] = Field(default_factory=list)
    started_at: datetime | None = None
    ended_at: datetime | None = None
    duration_seconds: int | None = None  # null while the session is open
    fastest_ms: int | None = None
    slowest_ms: int | None = None


class PaginationSchema(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class SessionHistorySummarySchema(BaseModel):
    """Totals over all of a user's sessions, not just the current page."""

    total_sessions: int = 0
    completed_sessions: int = 0
    average_score: float = 0.0
    best_score: int = 0
    best_streak: int = 0
    average_accuracy: float = 0.0
    average_duration_seconds: int = 0


class SessionHistoryOutSchema(BaseModel):
    sessions: list[SessionHistoryItemSchema]
    pagination: PaginationSchema
    summary: SessionHistorySummarySchema
