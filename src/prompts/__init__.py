"""
AI prompt templates for PrepPilot

Contains structured prompts for:
- Question generation
- Response feedback
- Media transcription
"""

from src.prompts.interviewer import InterviewerPrompts
from src.prompts.evaluator import EvaluatorPrompts

__all__ = [
    "InterviewerPrompts",
    "EvaluatorPrompts",
]
