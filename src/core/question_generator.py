"""
Question Generator for PrepPilot

Builds the ordered question set for a new interview:
- Role-agnostic base questions merged with the role's own questions
- Difficulty rewrite of technical questions
- Seedable Fisher-Yates shuffle, capped at 7 questions

When a generation backend is configured it is asked first; the local
catalog is always the fallback.
"""

import asyncio
import logging
import random
import re
from typing import Any

from src.models.interview import Difficulty
from src.models.question import GeneratedQuestion, QuestionType
from src.models.roles import get_base_questions, get_role_questions

logger = logging.getLogger(__name__)


# Hard cap on the question set, whatever count the caller asks for
MAX_GENERATED_QUESTIONS = 7

ADVANCED_PATTERN = re.compile(r"how|explain|describe", re.IGNORECASE)
ADVANCED_PHRASE = "Provide an in-depth explanation of"

BEGINNER_PATTERN = re.compile(r"explain|describe", re.IGNORECASE)
BEGINNER_PHRASE = "Briefly explain"


def shuffle_questions(
    questions: list[GeneratedQuestion],
    rng: random.Random | None = None,
) -> list[GeneratedQuestion]:
    """Fisher-Yates shuffle into a new list."""
    if rng is None:
        rng = random.Random()

    shuffled = list(questions)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def adjust_for_difficulty(
    questions: list[GeneratedQuestion],
    difficulty: Difficulty | str | None,
) -> list[GeneratedQuestion]:
    """
    Rewrite technical questions for the requested difficulty.

    Only the first matching verb of each technical question is replaced.
    Intermediate or unset difficulty leaves every question as is.
    """
    if difficulty == Difficulty.ADVANCED:
        pattern, phrase = ADVANCED_PATTERN, ADVANCED_PHRASE
    elif difficulty == Difficulty.BEGINNER:
        pattern, phrase = BEGINNER_PATTERN, BEGINNER_PHRASE
    else:
        return list(questions)

    adjusted = []
    for question in questions:
        if question.question_type == QuestionType.TECHNICAL:
            question = question.model_copy(
                update={"question_text": pattern.sub(phrase, question.question_text, count=1)}
            )
        adjusted.append(question)
    return adjusted


class QuestionGenerator:
    """
    Produces the question set for an interview.

    The local catalog path is pure: given the same inputs and a seeded
    random.Random it always returns the same questions.
    """

    def __init__(self, backend: Any = None, timeout_seconds: float = 30.0):
        """
        Args:
            backend: Optional generation backend (GeminiBackend)
            timeout_seconds: Upper bound for a backend call
        """
        self.backend = backend
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def _limit(count: int | None) -> int:
        if count is None:
            return MAX_GENERATED_QUESTIONS
        return max(1, min(count, MAX_GENERATED_QUESTIONS))

    def generate(
        self,
        job_role: str,
        industry: str | None = None,
        difficulty: Difficulty | str | None = None,
        count: int | None = MAX_GENERATED_QUESTIONS,
        rng: random.Random | None = None,
    ) -> list[GeneratedQuestion]:
        """
        Generate questions from the local catalog.

        Args:
            job_role: Exact job role name (role questions only for known roles)
            industry: Industry used in general questions
            difficulty: beginner | intermediate | advanced
            count: Requested number of questions (never more than 7 returned)
            rng: Random source for the shuffle

        Returns:
            Between 1 and 7 questions
        """
        limit = self._limit(count)

        try:
            questions = get_base_questions(job_role, industry) + get_role_questions(job_role)
            questions = adjust_for_difficulty(questions, difficulty)
            return shuffle_questions(questions, rng)[:limit]
        except Exception as e:
            logger.error(f"Question generation failed for role '{job_role}': {e}")
            return get_base_questions(job_role, industry)[:limit]

    async def generate_async(
        self,
        job_role: str,
        industry: str | None = None,
        difficulty: Difficulty | str | None = None,
        count: int | None = MAX_GENERATED_QUESTIONS,
        rng: random.Random | None = None,
    ) -> list[GeneratedQuestion]:
        """Ask the backend for questions, falling back to the local catalog."""
        limit = self._limit(count)

        if self.backend is not None:
            try:
                generated = await asyncio.wait_for(
                    self.backend.generate_questions(
                        job_role=job_role,
                        industry=industry,
                        difficulty=difficulty,
                        count=limit,
                    ),
                    timeout=self.timeout_seconds,
                )
                questions = [q for q in generated if q.question_text.strip()]
                if questions:
                    logger.info(f"Generated {len(questions[:limit])} questions for '{job_role}' via backend")
                    return questions[:limit]
                logger.warning("Backend returned no usable questions, using question catalog")
            except asyncio.TimeoutError:
                logger.warning(f"Question generation timed out after {self.timeout_seconds}s, using question catalog")
            except Exception as e:
                logger.warning(f"Question generation backend failed, using question catalog: {e}")

        return self.generate(job_role, industry, difficulty, count=limit, rng=rng)
