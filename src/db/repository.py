"""
Interview Repository - row-oriented access to the four interview tables.

Every public method runs in its own transaction and returns Pydantic
records, so no ORM instance outlives its session. Database failures are
re-raised as StorageError.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from src.exceptions import StorageError
from src.db.tables import Feedback, Interview, Question, Response
from src.models.evaluation import (
    FeedbackAnalysis,
    FeedbackRecord,
    ResponseRecord,
    ResponseType,
)
from src.models.interview import InterviewRecord, InterviewSetup, InterviewStatus
from src.models.question import GeneratedQuestion, QuestionRecord
from src.models.report import QuestionWithResponses

logger = logging.getLogger(__name__)


class InterviewRepository:
    """CRUD operations for interviews, questions, responses and feedback."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        db: Session = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise StorageError(f"Failed to {action}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # =========================================================================
    # INTERVIEWS
    # =========================================================================

    def create_interview_with_questions(
        self,
        setup: InterviewSetup,
        questions: list[GeneratedQuestion],
    ) -> tuple[InterviewRecord, list[QuestionRecord]]:
        """
        Insert an interview and its ordered question set atomically.

        Either both the interview and all of its questions are committed,
        or nothing is.
        """
        with self._transaction("create interview") as db:
            interview = Interview(
                title=setup.title,
                job_role=setup.job_role,
                industry=setup.industry or None,
                difficulty=setup.difficulty,
                status=InterviewStatus.IN_PROGRESS,
            )
            db.add(interview)
            db.flush()

            rows = [
                Question(
                    interview_id=interview.id,
                    question_text=question.question_text,
                    question_type=question.question_type,
                    order_number=index + 1,
                )
                for index, question in enumerate(questions)
            ]
            db.add_all(rows)
            db.flush()

            db.refresh(interview)
            for row in rows:
                db.refresh(row)

            return (
                InterviewRecord.model_validate(interview),
                [QuestionRecord.model_validate(row) for row in rows],
            )

    def get_interview(self, interview_id: str) -> InterviewRecord | None:
        with self._transaction("load interview") as db:
            interview = db.get(Interview, interview_id)
            return InterviewRecord.model_validate(interview) if interview else None

    def list_interviews(self, status: InterviewStatus | None = None) -> list[InterviewRecord]:
        """Interviews newest first, optionally filtered by status."""
        with self._transaction("list interviews") as db:
            query = select(Interview).order_by(Interview.created_at.desc())
            if status is not None:
                query = query.where(Interview.status == status)
            return [InterviewRecord.model_validate(row) for row in db.scalars(query)]

    def update_interview_status(
        self,
        interview_id: str,
        status: InterviewStatus,
        completed_at: datetime | None = None,
    ) -> InterviewRecord | None:
        with self._transaction("update interview status") as db:
            interview = db.get(Interview, interview_id)
            if interview is None:
                return None
            interview.status = status
            interview.completed_at = completed_at
            db.flush()
            return InterviewRecord.model_validate(interview)

    # =========================================================================
    # QUESTIONS
    # =========================================================================

    def list_questions(self, interview_id: str) -> list[QuestionRecord]:
        """Questions of an interview in presentation order."""
        with self._transaction("list questions") as db:
            query = (
                select(Question)
                .where(Question.interview_id == interview_id)
                .order_by(Question.order_number)
            )
            return [QuestionRecord.model_validate(row) for row in db.scalars(query)]

    def answered_question_ids(self, interview_id: str) -> set[str]:
        """Ids of the interview's questions that already have a response."""
        with self._transaction("load answered questions") as db:
            query = (
                select(Response.question_id)
                .join(Question, Question.id == Response.question_id)
                .where(Question.interview_id == interview_id)
            )
            return set(db.scalars(query))

    # =========================================================================
    # RESPONSES
    # =========================================================================

    def upsert_response(
        self,
        question_id: str,
        response_type: ResponseType,
        response_text: str | None,
        media_url: str | None,
    ) -> ResponseRecord:
        """Insert the response for a question, or overwrite the existing one in place."""
        with self._transaction("save response") as db:
            response = db.scalars(
                select(Response).where(Response.question_id == question_id)
            ).one_or_none()

            if response is None:
                response = Response(question_id=question_id)
                db.add(response)

            response.response_type = response_type
            response.response_text = response_text
            response.media_url = media_url
            db.flush()
            db.refresh(response)
            return ResponseRecord.model_validate(response)

    def get_response_for_question(self, question_id: str) -> ResponseRecord | None:
        with self._transaction("load response") as db:
            response = db.scalars(
                select(Response).where(Response.question_id == question_id)
            ).one_or_none()
            return ResponseRecord.model_validate(response) if response else None

    def update_response_text(self, response_id: str, response_text: str) -> ResponseRecord:
        """Store transcribed text on an existing response."""
        with self._transaction("store transcription") as db:
            response = db.get(Response, response_id)
            if response is None:
                raise StorageError(f"Response not found: {response_id}")
            response.response_text = response_text
            db.flush()
            return ResponseRecord.model_validate(response)

    # =========================================================================
    # FEEDBACK
    # =========================================================================

    def upsert_feedback(self, response_id: str, analysis: FeedbackAnalysis) -> FeedbackRecord:
        """Insert the feedback for a response, or overwrite the existing one in place."""
        with self._transaction("save feedback") as db:
            feedback = db.scalars(
                select(Feedback).where(Feedback.response_id == response_id)
            ).one_or_none()

            if feedback is None:
                feedback = Feedback(response_id=response_id)
                db.add(feedback)

            feedback.feedback_text = analysis.feedback_text
            feedback.improvement_areas = list(analysis.improvement_areas)
            feedback.strengths = list(analysis.strengths)
            feedback.confidence_score = analysis.confidence_score
            db.flush()
            db.refresh(feedback)
            return FeedbackRecord.model_validate(feedback)

    def count_feedback(self, response_id: str) -> int:
        with self._transaction("count feedback") as db:
            query = select(Feedback.id).where(Feedback.response_id == response_id)
            return len(db.scalars(query).all())

    # =========================================================================
    # RESULTS
    # =========================================================================

    def load_results(self, interview_id: str) -> list[QuestionWithResponses]:
        """Questions in order, each with its responses and their feedback."""
        with self._transaction("load results") as db:
            query = (
                select(Question)
                .where(Question.interview_id == interview_id)
                .order_by(Question.order_number)
                .options(selectinload(Question.responses).selectinload(Response.feedback))
            )
            return [QuestionWithResponses.model_validate(row) for row in db.scalars(query)]
