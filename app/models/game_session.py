"""GameSession model: one quiz attempt with running score and streak."""
import enum

from sqlalchemy import JSON, Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.session import Base


class SessionStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class GameSession(Base):
    __tablename__ = "game_sessions"

    id = Column(String(36), primary_key=True)  # UUID4 string
    # Opaque id from the identity provider; null for anonymous play
    user_id = Column(String(255), nullable=True, index=True)
    status = Column(
        Enum(SessionStatus, name="session_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SessionStatus.OPEN,
    )
    score = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    questions_answered = Column(Integer, nullable=False, default=0)
    category_filter = Column(JSON, nullable=False, default=list)  # [] means all categories
    started_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
    ended_at = Column(DateTime(timezone=True), nullable=True)

    guesses = relationship("Guess", back_populates="session", order_by="Guess.id")
