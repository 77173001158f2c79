"""
Interview session and state models for PrepPilot
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.evaluation import FeedbackRecord, ResponseRecord
from src.models.question import QuestionRecord


class InterviewStatus(str, Enum):
    """Persisted interview lifecycle states."""

    IN_PROGRESS = "in_progress"  # Questions seeded, answers being collected
    COMPLETED = "completed"  # Last question answered
    ABANDONED = "abandoned"  # Closed externally, never produced by the flow

    @property
    def is_terminal(self) -> bool:
        return self != InterviewStatus.IN_PROGRESS


class Difficulty(str, Enum):
    """Interview difficulty options."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class InterviewSetup(BaseModel):
    """User's interview configuration."""

    title: str = Field(..., min_length=1, max_length=200)
    job_role: str = Field(
        ..., min_length=1, max_length=200,
        description="Job role the questions are tailored to"
    )
    industry: str | None = Field(
        default=None,
        description="Industry used to phrase general questions"
    )
    difficulty: Difficulty | None = Field(
        default=None,
        description="Rewrites technical questions when beginner or advanced"
    )


class InterviewRecord(BaseModel):
    """A persisted interview row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    job_role: str
    industry: str | None = None
    difficulty: Difficulty | None = None
    status: InterviewStatus = InterviewStatus.IN_PROGRESS
    created_at: datetime
    completed_at: datetime | None = None


class InterviewDetail(BaseModel):
    """An interview with its ordered question set."""

    interview: InterviewRecord
    questions: list[QuestionRecord] = Field(default_factory=list)


class SessionCursor(BaseModel):
    """
    Client-held position within an interview.

    Never persisted; rebuilt on resume from which questions already
    have a stored response.
    """

    interview_id: str
    current_index: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)

    @property
    def is_last(self) -> bool:
        return self.current_index >= self.total_questions - 1

    def advanced(self) -> "SessionCursor":
        """Cursor pointing at the next question."""
        return self.model_copy(update={"current_index": self.current_index + 1})


class AdvanceResult(BaseModel):
    """Outcome of answering one question."""

    interview_id: str
    response: ResponseRecord
    feedback: FeedbackRecord
    cursor: SessionCursor
    status: InterviewStatus
    completed_at: datetime | None = None

    @property
    def completed(self) -> bool:
        return self.status == InterviewStatus.COMPLETED
