from app.models.category import Category
from app.models.passage import Passage, SourceType
from app.models.game_session import GameSession, SessionStatus
from app.models.guess import Guess
from app.models.user_stats import UserStats

__all__ = ["Category", "Passage", "SourceType", "GameSession", "SessionStatus", "Guess", "UserStats"]
