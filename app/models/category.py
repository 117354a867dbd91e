"""Category model: passage grouping with display/theme metadata for the UI."""
from sqlalchemy import JSON, Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.session import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), unique=True, nullable=False)
    css_category = Column(String(64), nullable=False, default="default")  # theme key for the frontend
    theme_tokens = Column(JSON, nullable=True)

    passages = relationship("Passage", back_populates="category")
