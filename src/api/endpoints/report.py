"""
Report API endpoints

Handles:
- Full interview results
- Condensed results summary
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.api.dependencies import get_orchestrator, to_http_exception
from src.core.interview_orchestrator import InterviewOrchestrator
from src.exceptions import PrepPilotError
from src.models.interview import InterviewStatus
from src.models.report import InterviewResults, QuestionWithResponses

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ReportSummaryResponse(BaseModel):
    """Condensed report response."""
    interview_id: str
    overall_score: float
    score_band: str
    top_strength: str
    top_improvement_area: str
    answered_questions: int
    total_questions: int


class ReportResponse(BaseModel):
    """Full report response."""
    interview_id: str
    title: str
    job_role: str
    industry: str | None
    difficulty: str | None
    status: str
    overall_score: float
    score_band: str
    score_band_label: str
    score_band_description: str
    strengths: list[str]
    improvement_areas: list[str]
    total_questions: int
    answered_questions: int
    questions: list[QuestionWithResponses] = []


# ============================================================================
# ENDPOINTS
# ============================================================================

def _load_results(orchestrator: InterviewOrchestrator, interview_id: str) -> InterviewResults:
    try:
        interview = orchestrator.get_interview(interview_id)
    except PrepPilotError as e:
        raise to_http_exception(e) from e

    # Results are only shown once answering is closed
    if interview.status == InterviewStatus.IN_PROGRESS:
        raise HTTPException(
            status_code=400,
            detail=f"Interview not complete. Current status: {interview.status.value}"
        )

    try:
        return orchestrator.get_results(interview_id)
    except PrepPilotError as e:
        raise to_http_exception(e) from e


@router.get("/{interview_id}", response_model=ReportResponse)
async def get_report(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> ReportResponse:
    """
    Get the full interview results.

    Includes every question with its answer and feedback.
    """
    results = _load_results(orchestrator, interview_id)
    interview = results.interview

    return ReportResponse(
        interview_id=interview.id,
        title=interview.title,
        job_role=interview.job_role,
        industry=interview.industry,
        difficulty=interview.difficulty.value if interview.difficulty else None,
        status=interview.status.value,
        overall_score=results.summary.overall_score,
        score_band=results.score_band.value,
        score_band_label=results.score_band.display_text,
        score_band_description=results.score_band.description,
        strengths=results.summary.strengths,
        improvement_areas=results.summary.improvement_areas,
        total_questions=results.total_questions,
        answered_questions=results.answered_questions,
        questions=results.questions,
    )


@router.get("/{interview_id}/summary", response_model=ReportSummaryResponse)
async def get_report_summary(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> ReportSummaryResponse:
    """
    Get a condensed results summary.

    Useful for dashboard cards.
    """
    results = _load_results(orchestrator, interview_id)
    summary = results.summary

    return ReportSummaryResponse(
        interview_id=results.interview.id,
        overall_score=summary.overall_score,
        score_band=results.score_band.value,
        top_strength=summary.strengths[0] if summary.strengths else "N/A",
        top_improvement_area=summary.improvement_areas[0] if summary.improvement_areas else "N/A",
        answered_questions=results.answered_questions,
        total_questions=results.total_questions,
    )
