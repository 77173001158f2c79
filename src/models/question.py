"""
Question models for PrepPilot
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class QuestionType(str, Enum):
    """Types of interview questions."""

    BEHAVIORAL = "behavioral"    # Tell me about a time...
    TECHNICAL = "technical"      # Explain X / How would you build X?
    SITUATIONAL = "situational"  # How would you handle X?
    GENERAL = "general"          # Career, motivation, background


class GeneratedQuestion(BaseModel):
    """A question produced by the generator, before it is persisted."""

    question_text: str = Field(..., min_length=1)
    question_type: QuestionType | None = None


class QuestionRecord(BaseModel):
    """A persisted question row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    interview_id: str
    question_text: str
    question_type: QuestionType | None = None
    order_number: int = Field(..., ge=1)
    created_at: datetime
