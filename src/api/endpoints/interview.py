"""
Interview API endpoints

Handles interview lifecycle:
- Creating interviews
- Listing and loading interviews
- Resuming
- Submitting answers
- Completing or abandoning interviews
"""

from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from src.api.dependencies import get_orchestrator, to_http_exception
from src.core.interview_orchestrator import InterviewOrchestrator
from src.exceptions import PrepPilotError
from src.models.evaluation import FeedbackRecord, ResponseRecord, ResponseSubmission, ResponseType
from src.models.interview import (
    Difficulty,
    InterviewDetail,
    InterviewRecord,
    InterviewSetup,
    InterviewStatus,
)
from src.models.question import QuestionRecord

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class SetupRequest(BaseModel):
    """Request model for interview setup."""
    title: str
    job_role: str
    industry: str | None = None
    difficulty: Difficulty | None = None


class SetupResponse(BaseModel):
    """Response model for interview setup."""
    interview_id: str
    status: str
    total_questions: int
    questions: list[QuestionRecord]
    message: str


class ResumeResponse(BaseModel):
    """Where the candidate should continue."""
    interview_id: str
    status: str
    current_index: int
    total_questions: int
    question: QuestionRecord | None = None


class SubmitResponseResponse(BaseModel):
    """Response after submitting an answer."""
    action: str  # "question", "complete"
    interview_id: str
    status: str
    current_index: int
    total_questions: int
    response: ResponseRecord
    feedback: FeedbackRecord
    completed_at: datetime | None = None


class StatusResponse(BaseModel):
    """Response for status changes."""
    interview_id: str
    status: str
    completed_at: datetime | None = None


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("/setup", response_model=SetupResponse, status_code=201)
async def setup_interview(
    request: SetupRequest,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> SetupResponse:
    """
    Create a new interview.

    The question set is generated and stored together with the interview.
    """
    try:
        setup = InterviewSetup(
            title=request.title,
            job_role=request.job_role,
            industry=request.industry or None,
            difficulty=request.difficulty,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        detail = await orchestrator.create_interview(setup)
    except PrepPilotError as e:
        raise to_http_exception(e) from e

    return SetupResponse(
        interview_id=detail.interview.id,
        status=detail.interview.status.value,
        total_questions=len(detail.questions),
        questions=detail.questions,
        message="Interview created. Answer the first question to begin.",
    )


@router.get("/", response_model=list[InterviewRecord])
async def list_interviews(
    status: InterviewStatus | None = None,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> list[InterviewRecord]:
    """List interviews, newest first."""
    try:
        return orchestrator.list_interviews(status)
    except PrepPilotError as e:
        raise to_http_exception(e) from e


@router.get("/{interview_id}", response_model=InterviewDetail)
async def get_interview(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> InterviewDetail:
    """Get an interview with its questions in order."""
    try:
        return orchestrator.get_interview_detail(interview_id)
    except PrepPilotError as e:
        raise to_http_exception(e) from e


@router.get("/{interview_id}/resume", response_model=ResumeResponse)
async def resume_interview(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> ResumeResponse:
    """Get the first unanswered question of an interview."""
    try:
        interview = orchestrator.get_interview(interview_id)
        cursor = await orchestrator.resume(interview_id)
        questions = orchestrator.get_questions(interview_id)
    except PrepPilotError as e:
        raise to_http_exception(e) from e

    question = questions[cursor.current_index] if questions else None
    return ResumeResponse(
        interview_id=interview_id,
        status=interview.status.value,
        current_index=cursor.current_index,
        total_questions=cursor.total_questions,
        question=question,
    )


@router.post("/{interview_id}/respond", response_model=SubmitResponseResponse)
async def submit_response(
    interview_id: str,
    current_index: int = Form(...),
    response_type: ResponseType = Form(...),
    response_text: str | None = Form(None),
    media: UploadFile | None = File(None),
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> SubmitResponseResponse:
    """
    Submit an answer to the question at current_index.

    Text answers go in response_text; audio and video answers are
    uploaded as the media file.
    """
    media_bytes = None
    content_type = None
    if media is not None:
        media_bytes = await media.read()
        content_type = media.content_type

    submission = ResponseSubmission(
        response_type=response_type,
        response_text=response_text,
        media=media_bytes,
        content_type=content_type,
    )

    try:
        result = await orchestrator.advance(interview_id, current_index, submission)
    except PrepPilotError as e:
        raise to_http_exception(e) from e

    return SubmitResponseResponse(
        action="complete" if result.completed else "question",
        interview_id=interview_id,
        status=result.status.value,
        current_index=result.cursor.current_index,
        total_questions=result.cursor.total_questions,
        response=result.response,
        feedback=result.feedback,
        completed_at=result.completed_at,
    )


@router.post("/{interview_id}/complete", response_model=StatusResponse)
async def complete_interview(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> StatusResponse:
    """
    End the interview early.

    Unanswered questions stay unanswered; results cover what was answered.
    """
    try:
        interview = await orchestrator.complete_interview(interview_id)
    except PrepPilotError as e:
        raise to_http_exception(e) from e

    return StatusResponse(
        interview_id=interview.id,
        status=interview.status.value,
        completed_at=interview.completed_at,
    )


@router.post("/{interview_id}/abandon", response_model=StatusResponse)
async def abandon_interview(
    interview_id: str,
    orchestrator: InterviewOrchestrator = Depends(get_orchestrator),
) -> StatusResponse:
    """Close the interview without completing it."""
    try:
        interview = await orchestrator.abandon_interview(interview_id)
    except PrepPilotError as e:
        raise to_http_exception(e) from e

    return StatusResponse(
        interview_id=interview.id,
        status=interview.status.value,
        completed_at=interview.completed_at,
    )
