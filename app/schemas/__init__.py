from app.schemas.guess import GuessResultSchema, GuessSubmitSchema
from app.schemas.question import QuestionOutSchema
from app.schemas.session import (
    PaginationSchema,
    SessionHistoryItemSchema,
    SessionHistoryOutSchema,
    SessionHistorySummarySchema,
    SessionRefSchema,
    SessionStatsOutSchema,
    StartSessionOutSchema,
    StartSessionSchema,
)
from app.schemas.stats import UserStatsOutSchema

__all__ = [
    "GuessResultSchema",
    "GuessSubmitSchema",
    "PaginationSchema",
    "QuestionOutSchema",
    "SessionHistoryItemSchema",
    "SessionHistoryOutSchema",
    "SessionHistorySummarySchema",
    "SessionRefSchema",
    "SessionStatsOutSchema",
    "StartSessionOutSchema",
    "StartSessionSchema",
    "UserStatsOutSchema",
]
