"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

import logging

from fastapi import HTTPException

from src.config.settings import get_settings
from src.core.ai_reasoning import GeminiBackend
from src.core.feedback_synthesizer import FeedbackSynthesizer
from src.core.interview_orchestrator import InterviewOrchestrator
from src.core.object_storage import ObjectStorage
from src.core.question_generator import QuestionGenerator
from src.core.response_capture import ResponseCapture
from src.core.results_aggregator import ResultsAggregator
from src.db.repository import InterviewRepository
from src.db.session import create_session_factory, get_engine
from src.exceptions import (
    CompletionError,
    InterviewCreationError,
    InterviewNotFoundError,
    PrepPilotError,
    QuestionNotFoundError,
    ResponseValidationError,
    StateTransitionError,
    StorageError,
)

logger = logging.getLogger(__name__)


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_orchestrator: InterviewOrchestrator | None = None
_backend: GeminiBackend | None = None


def get_orchestrator() -> InterviewOrchestrator:
    """
    Get the interview orchestrator singleton.

    Lazily initializes all required components.
    """
    global _orchestrator, _backend

    if _orchestrator is None:
        settings = get_settings()

        # The generation backend is optional; defaults cover its absence
        if settings.generation_backend_enabled:
            try:
                _backend = GeminiBackend(settings)
            except Exception as e:
                logger.warning(f"Generation backend unavailable, using defaults: {e}")
                _backend = None

        repository = InterviewRepository(create_session_factory(get_engine()))
        storage = ObjectStorage(settings=settings)

        _orchestrator = InterviewOrchestrator(
            repository=repository,
            question_generator=QuestionGenerator(_backend, settings.generation_timeout_seconds),
            response_capture=ResponseCapture(repository, storage, settings),
            feedback_synthesizer=FeedbackSynthesizer(_backend, settings.generation_timeout_seconds),
            results_aggregator=ResultsAggregator(),
            settings=settings,
        )

    return _orchestrator


async def cleanup():
    """Cleanup resources on shutdown."""
    global _orchestrator, _backend

    if _backend:
        await _backend.close()
        _backend = None

    _orchestrator = None


# ============================================================================
# ERROR MAPPING
# ============================================================================

ERROR_STATUS_CODES: dict[type[PrepPilotError], int] = {
    ResponseValidationError: 400,
    InterviewNotFoundError: 404,
    QuestionNotFoundError: 404,
    StateTransitionError: 409,
    StorageError: 502,
    InterviewCreationError: 502,
    CompletionError: 502,
}


def to_http_exception(error: PrepPilotError) -> HTTPException:
    """Translate a core error into the matching HTTP error."""
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
