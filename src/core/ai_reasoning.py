"""
AI Reasoning Layer for PrepPilot

Handles all AI-powered operations:
- Question set generation
- Feedback on answers
- Transcription of recorded answers

Talks to the Gemini generateContent REST API. Callers treat every
failure here as recoverable and fall back to local defaults.
"""

import base64
import json
import logging
from typing import Any

import httpx

from src.config.settings import Settings, get_settings
from src.models.evaluation import FeedbackAnalysis
from src.models.question import GeneratedQuestion, QuestionType
from src.prompts.interviewer import InterviewerPrompts
from src.prompts.evaluator import EvaluatorPrompts

logger = logging.getLogger(__name__)


class GeminiBackend:
    """
    Text-generation backend using Gemini models.

    The same model serves question generation, feedback and
    transcription; recordings are sent inline as base64.
    """

    def __init__(self, settings: Settings | None = None, client: httpx.AsyncClient | None = None):
        """
        Args:
            settings: Application settings (API key, model, base URL)
            client: Preconfigured HTTP client, mainly for tests
        """
        self.settings = settings or get_settings()
        if not self.settings.google_ai_api_key:
            raise ValueError("GOOGLE_AI_API_KEY is not configured")

        self.base_url = self.settings.gemini_base_url.rstrip("/")
        self.headers = {
            "x-goog-api-key": self.settings.google_ai_api_key,
            "Content-Type": "application/json",
        }

        # The API key is sent per request so recording downloads never carry it
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=60.0,
        )

        # Prompt templates
        self.interviewer_prompts = InterviewerPrompts()
        self.evaluator_prompts = EvaluatorPrompts()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    # =========================================================================
    # CORE AI OPERATIONS
    # =========================================================================

    @property
    def endpoint(self) -> str:
        return f"/v1beta/models/{self.settings.gemini_model}:generateContent"

    def _extract_content(self, result: dict) -> str:
        """Join the text parts of the first candidate."""
        candidates = result.get("candidates") or [{}]
        parts = candidates[0].get("content", {}).get("parts", [])

        text_parts = []
        for part in parts:
            if isinstance(part, str):
                text_parts.append(part)
            elif isinstance(part, dict) and "text" in part:
                text_parts.append(part["text"])
        return "".join(text_parts)

    async def _call_gemini(
        self,
        parts: list[dict[str, Any]],
        max_tokens: int = 2048,
        temperature: float = 0.7,
    ) -> str:
        """
        Call Gemini with a single user turn.

        Args:
            parts: Content parts (text and/or inline_data)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            Model response text
        """
        try:
            payload = {
                "contents": [
                    {"role": "user", "parts": parts}
                ],
                "generationConfig": {
                    "maxOutputTokens": max_tokens,
                    "temperature": temperature,
                },
            }

            response = await self.client.post(
                self.endpoint,
                json=payload,
                headers=self.headers,
            )
            response.raise_for_status()

            result = response.json()
            return self._extract_content(result)

        except httpx.HTTPError as e:
            logger.error(f"Gemini API error: {e}")
            raise

    @staticmethod
    def _extract_json(response: str, opening: str, closing: str) -> Any:
        """Parse the outermost JSON value delimited by opening/closing."""
        json_start = response.find(opening)
        json_end = response.rfind(closing) + 1
        if json_start < 0 or json_end <= json_start:
            raise ValueError("No JSON found in model response")
        return json.loads(response[json_start:json_end])

    # =========================================================================
    # QUESTION GENERATION
    # =========================================================================

    async def generate_questions(
        self,
        job_role: str,
        industry: str | None,
        difficulty: str | None,
        count: int,
    ) -> list[GeneratedQuestion]:
        """
        Generate a question set for an interview.

        Raises:
            httpx.HTTPError: On transport or HTTP status failures
            ValueError: If the model output cannot be parsed
        """
        prompt = self.interviewer_prompts.generate_questions_prompt(
            job_role=job_role,
            industry=industry,
            difficulty=difficulty,
            count=count,
        )
        response = await self._call_gemini([{"text": prompt}], max_tokens=1024)
        return self._parse_questions_response(response)

    def _parse_questions_response(self, response: str) -> list[GeneratedQuestion]:
        """Parse AI response into GeneratedQuestion objects."""
        try:
            data = self._extract_json(response, "[", "]")
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed question list: {e}") from e

        if not isinstance(data, list):
            raise ValueError("Question list is not a JSON array")

        type_map = {t.value: t for t in QuestionType}

        questions = []
        for item in data:
            if isinstance(item, str):
                item = {"question_text": item}
            if not isinstance(item, dict):
                continue
            text = str(item.get("question_text") or item.get("question") or "").strip()
            if not text:
                continue
            question_type = type_map.get(str(item.get("question_type") or "").lower())
            questions.append(GeneratedQuestion(question_text=text, question_type=question_type))

        return questions

    # =========================================================================
    # FEEDBACK
    # =========================================================================

    async def analyze_response(
        self,
        question: str,
        response: str,
        response_type: str,
        job_role: str,
    ) -> FeedbackAnalysis:
        """
        Produce feedback for one answer.

        Raises:
            httpx.HTTPError: On transport or HTTP status failures
            ValueError: If the model output cannot be parsed
        """
        prompt = self.evaluator_prompts.generate_feedback_prompt(
            question=question,
            response=response,
            response_type=response_type,
            job_role=job_role,
        )
        result = await self._call_gemini([{"text": prompt}], max_tokens=1024, temperature=0.4)
        return self._parse_feedback_response(result)

    def _parse_feedback_response(self, response: str) -> FeedbackAnalysis:
        """Parse AI response into a FeedbackAnalysis."""
        try:
            data = self._extract_json(response, "{", "}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed feedback: {e}") from e

        if not isinstance(data, dict) or not str(data.get("feedback_text", "")).strip():
            raise ValueError("Feedback is missing feedback_text")

        def _as_list(value: Any) -> list[str]:
            if isinstance(value, str):
                return [value] if value.strip() else []
            return [str(v) for v in value or [] if str(v).strip()]

        score = data.get("confidence_score")
        try:
            score = float(score) if score is not None else None
        except (TypeError, ValueError):
            score = None

        return FeedbackAnalysis(
            feedback_text=str(data["feedback_text"]).strip(),
            strengths=_as_list(data.get("strengths")),
            improvement_areas=_as_list(data.get("improvement_areas")),
            confidence_score=score,
        )

    # =========================================================================
    # TRANSCRIPTION
    # =========================================================================

    async def transcribe_media(self, media_url: str, media_type: str) -> str:
        """
        Download a recording and transcribe it.

        Args:
            media_url: Public URL of the stored recording
            media_type: audio | video

        Returns:
            Transcript text (may be empty)
        """
        media_type_value = getattr(media_type, "value", media_type)

        download = await self.client.get(media_url)
        download.raise_for_status()
        encoded = base64.b64encode(download.content).decode("ascii")
        logger.info(f"Transcribing {len(download.content)} bytes of {media_type_value}")

        parts = [
            {"text": self.evaluator_prompts.transcription_prompt(media_type_value)},
            {"inline_data": {"mime_type": f"{media_type_value}/webm", "data": encoded}},
        ]
        transcript = await self._call_gemini(parts, max_tokens=2048, temperature=0.0)
        return transcript.strip()
