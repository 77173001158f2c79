"""
Results models for PrepPilot

Defines the structure of the interview results page.
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.models.evaluation import FeedbackRecord, ResponseRecord
from src.models.interview import InterviewRecord
from src.models.question import QuestionRecord


class ScoreBand(str, Enum):
    """Qualitative band for an overall score."""

    STRONG = "strong"          # 80-100
    FAIR = "fair"              # 60-79
    NEEDS_WORK = "needs_work"  # 0-59

    @property
    def display_text(self) -> str:
        """Human-readable band."""
        texts = {
            "strong": "Strong",
            "fair": "Fair",
            "needs_work": "Needs Work",
        }
        return texts.get(self.value, self.value)

    @property
    def description(self) -> str:
        """Band description."""
        descriptions = {
            "strong": "Confident, well-supported answers across the interview.",
            "fair": "Solid answers with some room for more depth and examples.",
            "needs_work": "Answers need more structure, detail and relevance to the role.",
        }
        return descriptions.get(self.value, "")


class ResponseWithFeedback(ResponseRecord):
    """A response together with its feedback rows."""

    feedback: list[FeedbackRecord] = Field(default_factory=list)


class QuestionWithResponses(QuestionRecord):
    """A question together with its responses, as read for the results page."""

    responses: list[ResponseWithFeedback] = Field(default_factory=list)

    @property
    def answered(self) -> bool:
        return bool(self.responses)


class ResultsSummary(BaseModel):
    """Aggregate statistics over all feedback of an interview."""

    overall_score: float = Field(..., ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    improvement_areas: list[str] = Field(default_factory=list)
    scored_feedback_count: int = 0


class InterviewResults(BaseModel):
    """Complete results view for one interview."""

    interview: InterviewRecord
    summary: ResultsSummary
    score_band: ScoreBand
    total_questions: int
    answered_questions: int
    questions: list[QuestionWithResponses] = Field(default_factory=list)
