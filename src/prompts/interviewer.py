"""
AI Interviewer Prompt Templates

Contains structured prompts for:
- Question set generation for a new interview

Questions should read like a real interviewer wrote them, not a quiz.
"""

from src.models.question import QuestionType


class InterviewerPrompts:
    """
    Prompt templates for the AI interviewer.

    Key principles:
    - Role-appropriate questions only
    - A mix of question types
    - One question per entry, no answers
    """

    SYSTEM_CONTEXT = """You are an experienced hiring manager preparing a mock interview.

Your role:
- Write realistic interview questions for the target role
- Mix behavioral, technical, situational and general questions
- Never include answers or hints
- Keep each question to one or two sentences

Guidelines:
- Prefer "How would you..." and "Describe a time when..." formats
- Avoid trivia or obscure tool-specific questions
"""

    DIFFICULTY_GUIDANCE = {
        "beginner": "The candidate is early in their career. Keep technical questions approachable.",
        "intermediate": "The candidate has a few years of experience.",
        "advanced": "The candidate is senior. Technical questions should test depth and trade-offs.",
    }

    def generate_questions_prompt(
        self,
        job_role: str,
        industry: str | None,
        difficulty: str | None,
        count: int,
    ) -> str:
        """Generate prompt for creating an interview's question set."""
        difficulty_value = getattr(difficulty, "value", difficulty) or "intermediate"
        guidance = self.DIFFICULTY_GUIDANCE.get(difficulty_value, self.DIFFICULTY_GUIDANCE["intermediate"])
        question_types = " | ".join(t.value for t in QuestionType)

        return f"""{self.SYSTEM_CONTEXT}

=== INTERVIEW ===
Job role: {job_role}
Industry: {industry or "not specified"}
Difficulty: {difficulty_value}
{guidance}

=== TASK ===
Write exactly {count} interview questions for this candidate.

Respond with JSON only, in this format:
[
  {{"question_text": "...", "question_type": "{question_types}"}}
]
"""
