"""
Interview Orchestrator - State machine for managing interview lifecycle.

This is the central coordinator for the entire interview process.
It seeds the question set, drives each answer through capture,
transcription and feedback, and closes the interview after the last
question. Everything it produces is persisted, so an interview can be
resumed from storage alone.
"""

import asyncio
import logging
import weakref
import random
from datetime import datetime, timezone

from src.config.settings import Settings, get_settings
from src.core.feedback_synthesizer import FeedbackSynthesizer
from src.core.question_generator import QuestionGenerator
from src.core.response_capture import ResponseCapture
from src.core.results_aggregator import ResultsAggregator
from src.db.repository import InterviewRepository
from src.exceptions import (
    CompletionError,
    InterviewCreationError,
    InterviewNotFoundError,
    PrepPilotError,
    QuestionNotFoundError,
    StateTransitionError,
    StorageError,
)
from src.models.evaluation import ResponseSubmission
from src.models.interview import (
    AdvanceResult,
    InterviewDetail,
    InterviewRecord,
    InterviewSetup,
    InterviewStatus,
    SessionCursor,
)
from src.models.question import QuestionRecord
from src.models.report import InterviewResults

logger = logging.getLogger(__name__)


class InterviewOrchestrator:
    """
    Manages the interview lifecycle using a state machine pattern.

    States:
        IN_PROGRESS → COMPLETED   (last question answered, or ended early)
        IN_PROGRESS → ABANDONED   (closed without finishing)

    The orchestrator coordinates between:
    - Question Generator (at creation)
    - Response Capture (object storage + response rows)
    - Feedback Synthesizer (transcription, feedback)
    - Results Aggregator
    - Interview Repository
    """

    VALID_TRANSITIONS: dict[InterviewStatus, list[InterviewStatus]] = {
        InterviewStatus.IN_PROGRESS: [InterviewStatus.COMPLETED, InterviewStatus.ABANDONED],
        InterviewStatus.COMPLETED: [],  # Terminal state
        InterviewStatus.ABANDONED: [],  # Terminal state
    }

    def __init__(
        self,
        repository: InterviewRepository,
        question_generator: QuestionGenerator,
        response_capture: ResponseCapture,
        feedback_synthesizer: FeedbackSynthesizer,
        results_aggregator: ResultsAggregator,
        settings: Settings | None = None,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            repository: Storage for interviews, questions, responses, feedback
            question_generator: Builds the question set at creation
            response_capture: Validates and stores answers
            feedback_synthesizer: Transcription and feedback
            results_aggregator: Results view
            settings: Application settings
        """
        self.repository = repository
        self.question_generator = question_generator
        self.response_capture = response_capture
        self.feedback_synthesizer = feedback_synthesizer
        self.results_aggregator = results_aggregator
        self.settings = settings or get_settings()

        # One step at a time per interview
        # Entries drop out once no step holds or waits on the lock
        self._step_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    async def create_interview(
        self,
        setup: InterviewSetup,
        rng: random.Random | None = None,
    ) -> InterviewDetail:
        """
        Create an interview and seed its question set.

        The interview and all its questions are written in one transaction.

        Args:
            setup: User's interview configuration
            rng: Random source for question order

        Returns:
            The new interview with its ordered questions

        Raises:
            InterviewCreationError: If nothing could be stored
        """
        questions = await self.question_generator.generate_async(
            job_role=setup.job_role,
            industry=setup.industry,
            difficulty=setup.difficulty,
            count=self.settings.default_question_count,
            rng=rng,
        )
        if not questions:
            raise InterviewCreationError(f"No questions could be generated for '{setup.job_role}'")

        try:
            interview, records = self.repository.create_interview_with_questions(setup, questions)
        except StorageError as e:
            logger.error(f"Failed to create interview '{setup.title}': {e}")
            raise InterviewCreationError(f"Failed to create interview: {e}") from e

        logger.info(
            f"Created interview {interview.id} for '{interview.job_role}' "
            f"with {len(records)} questions"
        )
        return InterviewDetail(interview=interview, questions=records)

    def get_interview(self, interview_id: str) -> InterviewRecord:
        """Get an interview by ID."""
        interview = self.repository.get_interview(interview_id)
        if interview is None:
            raise InterviewNotFoundError(interview_id)
        return interview

    def list_interviews(self, status: InterviewStatus | None = None) -> list[InterviewRecord]:
        """Interviews newest first, optionally filtered by status."""
        return self.repository.list_interviews(status)

    def get_questions(self, interview_id: str) -> list[QuestionRecord]:
        """Questions of an interview in order."""
        self.get_interview(interview_id)
        return self.repository.list_questions(interview_id)

    def get_interview_detail(self, interview_id: str) -> InterviewDetail:
        interview = self.get_interview(interview_id)
        return InterviewDetail(
            interview=interview,
            questions=self.repository.list_questions(interview_id),
        )

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    async def transition_state(
        self,
        interview_id: str,
        new_status: InterviewStatus,
    ) -> InterviewRecord:
        """
        Transition an interview to a new status.

        Args:
            interview_id: Interview ID
            new_status: Target status

        Returns:
            Updated interview

        Raises:
            StateTransitionError: If transition is invalid
        """
        interview = self.get_interview(interview_id)
        old_status = interview.status

        # Validate transition
        valid_next_statuses = self.VALID_TRANSITIONS.get(old_status, [])
        if new_status not in valid_next_statuses:
            raise StateTransitionError(
                f"Invalid transition from {old_status.value} to {new_status.value}. "
                f"Valid transitions: {[s.value for s in valid_next_statuses]}"
            )

        completed_at = None
        if new_status == InterviewStatus.COMPLETED:
            completed_at = datetime.now(timezone.utc)

        updated = self.repository.update_interview_status(interview_id, new_status, completed_at)
        if updated is None:
            raise InterviewNotFoundError(interview_id)

        if new_status.is_terminal:
            self._step_locks.pop(interview_id, None)

        logger.info(f"Interview {interview_id}: {old_status.value} → {new_status.value}")
        return updated

    async def complete_interview(self, interview_id: str) -> InterviewRecord:
        """End the interview now, answered or not."""
        return await self.transition_state(interview_id, InterviewStatus.COMPLETED)

    async def abandon_interview(self, interview_id: str) -> InterviewRecord:
        """Close the interview without completing it."""
        return await self.transition_state(interview_id, InterviewStatus.ABANDONED)

    # =========================================================================
    # INTERVIEW FLOW
    # =========================================================================

    async def resume(self, interview_id: str) -> SessionCursor:
        """
        Rebuild the cursor from storage.

        Points at the first question without a stored response. If every
        question is answered it points at the last one.
        """
        self.get_interview(interview_id)
        questions = self.repository.list_questions(interview_id)
        answered = self.repository.answered_question_ids(interview_id)

        current_index = next(
            (index for index, question in enumerate(questions) if question.id not in answered),
            max(len(questions) - 1, 0),
        )

        logger.info(
            f"Resuming interview {interview_id} at question {current_index + 1}/{len(questions)}"
        )
        return SessionCursor(
            interview_id=interview_id,
            current_index=current_index,
            total_questions=len(questions),
        )

    async def advance(
        self,
        interview_id: str,
        current_index: int,
        submission: ResponseSubmission,
    ) -> AdvanceResult:
        """
        Answer the question at current_index and move on.

        Steps:
            1. Capture the response
            2. Transcribe audio/video without text, store the text
            3. Analyze and store feedback
            4. Complete the interview on the last question, else cursor + 1

        A step runs to the end even if the caller goes away, and two steps
        of the same interview never run at the same time.

        Raises:
            ResponseValidationError: Invalid answer (nothing stored)
            InterviewNotFoundError, QuestionNotFoundError: Bad id or index
            StateTransitionError: Interview is no longer in progress
            StorageError: Steps 1-3 could not be persisted
            CompletionError: Last answer stored but completion failed
        """
        self.response_capture.validate(submission)

        lock = self._step_locks.get(interview_id)
        if lock is None:
            lock = asyncio.Lock()
            self._step_locks[interview_id] = lock
        return await asyncio.shield(
            self._advance_locked(lock, interview_id, current_index, submission)
        )

    async def _advance_locked(
        self,
        lock: asyncio.Lock,
        interview_id: str,
        current_index: int,
        submission: ResponseSubmission,
    ) -> AdvanceResult:
        async with lock:
            interview = self.get_interview(interview_id)
            if interview.status != InterviewStatus.IN_PROGRESS:
                raise StateTransitionError(
                    f"Interview {interview_id} is {interview.status.value}; answers are closed"
                )

            questions = self.repository.list_questions(interview_id)
            if not 0 <= current_index < len(questions):
                raise QuestionNotFoundError(
                    f"Interview {interview_id} has no question at index {current_index}"
                )

            question = questions[current_index]
            cursor = SessionCursor(
                interview_id=interview_id,
                current_index=current_index,
                total_questions=len(questions),
            )

            # 1. Capture
            response = await self.response_capture.submit(interview_id, question.id, submission)

            # 2. Transcription
            text = response.response_text
            if response.response_type.is_media and not (text and text.strip()):
                text = await self.feedback_synthesizer.transcribe(
                    response.media_url, response.response_type
                )
                response = self.repository.update_response_text(response.id, text)

            # 3. Feedback
            analysis = await self.feedback_synthesizer.analyze(
                question=question.question_text,
                response=text,
                response_type=response.response_type,
                job_role=interview.job_role,
            )
            feedback = self.repository.upsert_feedback(response.id, analysis)

            # 4. Completion or next question
            if cursor.is_last:
                try:
                    interview = await self.transition_state(interview_id, InterviewStatus.COMPLETED)
                except PrepPilotError as e:
                    logger.error(f"Interview {interview_id}: answer saved but completion failed: {e}")
                    raise CompletionError(
                        f"Your answer was saved but the interview could not be completed: {e}"
                    ) from e
                next_cursor = cursor
            else:
                next_cursor = cursor.advanced()

            return AdvanceResult(
                interview_id=interview_id,
                response=response,
                feedback=feedback,
                cursor=next_cursor,
                status=interview.status,
                completed_at=interview.completed_at,
            )

    # =========================================================================
    # RESULTS
    # =========================================================================

    def get_results(self, interview_id: str) -> InterviewResults:
        """Aggregate the stored feedback of an interview."""
        interview = self.get_interview(interview_id)
        questions = self.repository.load_results(interview_id)
        return self.results_aggregator.generate(interview, questions)
