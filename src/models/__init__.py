"""
Data models and schemas for PrepPilot

Contains Pydantic models for:
- Interviews and the client-held session cursor
- Questions
- Responses and feedback
- Results
"""

from src.models.interview import (
    AdvanceResult,
    Difficulty,
    InterviewDetail,
    InterviewRecord,
    InterviewSetup,
    InterviewStatus,
    SessionCursor,
)
from src.models.question import GeneratedQuestion, QuestionRecord, QuestionType
from src.models.evaluation import (
    FeedbackAnalysis,
    FeedbackRecord,
    ResponseRecord,
    ResponseSubmission,
    ResponseType,
)
from src.models.report import (
    InterviewResults,
    QuestionWithResponses,
    ResponseWithFeedback,
    ResultsSummary,
    ScoreBand,
)

__all__ = [
    # Interview
    "AdvanceResult",
    "Difficulty",
    "InterviewDetail",
    "InterviewRecord",
    "InterviewSetup",
    "InterviewStatus",
    "SessionCursor",
    # Question
    "GeneratedQuestion",
    "QuestionRecord",
    "QuestionType",
    # Response / feedback
    "FeedbackAnalysis",
    "FeedbackRecord",
    "ResponseRecord",
    "ResponseSubmission",
    "ResponseType",
    # Results
    "InterviewResults",
    "QuestionWithResponses",
    "ResponseWithFeedback",
    "ResultsSummary",
    "ScoreBand",
]
