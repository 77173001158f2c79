"""
Core business logic modules for PrepPilot

Contains:
- Interview Orchestrator: State machine for interview lifecycle
- Question Generator: Question sets from the catalog or the backend
- Response Capture: Answer validation, uploads and persistence
- Feedback Synthesizer: Feedback and transcription with defaults
- Results Aggregator: Overall score and merged feedback
- AI Reasoning: Gemini generation backend
- Object Storage: S3-compatible media uploads
"""

from src.core.interview_orchestrator import InterviewOrchestrator
from src.core.question_generator import QuestionGenerator
from src.core.response_capture import ResponseCapture
from src.core.feedback_synthesizer import FeedbackSynthesizer
from src.core.results_aggregator import ResultsAggregator
from src.core.ai_reasoning import GeminiBackend
from src.core.object_storage import ObjectStorage

__all__ = [
    "InterviewOrchestrator",
    "QuestionGenerator",
    "ResponseCapture",
    "FeedbackSynthesizer",
    "ResultsAggregator",
    "GeminiBackend",
    "ObjectStorage",
]
