"""SQLAlchemy declarative base and model imports for Alembic."""
from app.db.session import Base

# Import all models so Alembic can see them
from app.models.category import Category  # noqa: F401
from app.models.passage import Passage  # noqa: F401
from app.models.game_session import GameSession  # noqa: F401
from app.models.guess import Guess  # noqa: F401
from app.models.user_stats import UserStats  # noqa: F401

__all__ = ["Base", "Category", "Passage", "GameSession", "Guess", "UserStats"]
