"""Passage model: a text sample with a hidden source (human | ai) and a sampling key."""
import enum
import random

from sqlalchemy import Column, DateTime, Enum, Float, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.session import Base


class SourceType(str, enum.Enum):
    HUMAN = "human"
    AI = "ai"


class Passage(Base):
    __tablename__ = "passages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    source_type = Column(
        Enum(SourceType, name="source_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    # Uniform in [0, 1), assigned once at insert and never updated
    rand_key = Column(Float, nullable=False, default=random.random, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    category = relationship("Category", back_populates="passages")
    guesses = relationship("Guess", back_populates="passage")
