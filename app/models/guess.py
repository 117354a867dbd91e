"""Guess model: append-only answer log, one row per passage per session."""
from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.session import Base
from app.models.passage import SourceType


class Guess(Base):
    __tablename__ = "guesses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), ForeignKey("game_sessions.id"), nullable=False, index=True)
    user_id = Column(String(255), nullable=True, index=True)  # session owner at write time
    passage_id = Column(Integer, ForeignKey("passages.id"), nullable=False, index=True)
    guess_source = Column(
        Enum(SourceType, name="source_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_correct = Column(Boolean, nullable=False)  # fixed at write time
    time_ms = Column(Integer, nullable=False, default=0)  # client-reported
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    session = relationship("GameSession", back_populates="guesses")
    passage = relationship("Passage", back_populates="guesses")

    __table_args__ = (
        Index("uq_guesses_session_passage", "session_id", "passage_id", unique=True),
    )
