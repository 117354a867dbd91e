"""Pydantic schemas for passages served as questions. Never carries the source."""
from typing import Any

from pydantic import BaseModel


class QuestionOutSchema(BaseModel):
    id: int
    text: str
    category_name: str
    category_theme: str
    theme_tokens: dict[str, Any] | None = None

    class Config:
        from_attributes = True
