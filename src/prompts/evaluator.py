"""
AI Evaluator Prompt Templates

Contains structured prompts for:
- Feedback on a single interview answer
- Transcription of recorded answers
"""


class EvaluatorPrompts:
    """
    Prompt templates for AI feedback on responses.

    Key principles:
    - Identify both strengths and gaps
    - Provide actionable feedback
    - Confidence reflects answer quality, not length
    """

    SYSTEM_CONTEXT = """You are an interview coach reviewing a candidate's answer to a mock interview question.

Your role:
- Give honest, specific and encouraging feedback
- Name what the candidate did well
- Name what would make the answer stronger

Be fair but thorough. Judge the answer against what a hiring manager for the role expects.
"""

    def generate_feedback_prompt(
        self,
        question: str,
        response: str,
        response_type: str,
        job_role: str,
    ) -> str:
        """Generate prompt for feedback on one answer."""
        response_type_value = getattr(response_type, "value", response_type)
        delivery_note = ""
        if response_type_value in ("audio", "video"):
            delivery_note = (
                "The answer was spoken and transcribed automatically. "
                "Ignore filler words and transcription errors."
            )

        return f"""{self.SYSTEM_CONTEXT}

=== CONTEXT ===
Job role: {job_role}
Answer format: {response_type_value}
{delivery_note}

=== QUESTION ===
{question}

=== ANSWER ===
{response}

=== TASK ===
Respond with JSON only, in this format:
{{
  "feedback_text": "2-4 sentences of overall feedback",
  "strengths": ["strength 1", "strength 2"],
  "improvement_areas": ["area 1", "area 2"],
  "confidence_score": 0.0
}}

confidence_score is between 0.0 (poor answer) and 1.0 (excellent answer).
"""

    def transcription_prompt(self, media_type: str) -> str:
        """Generate prompt for transcribing a recorded answer."""
        media_type_value = getattr(media_type, "value", media_type)
        return (
            f"Transcribe the spoken words in this {media_type_value} recording of an "
            "interview answer. Return only the transcript text, with no commentary."
        )
