"""
Question catalog for PrepPilot

Defines the built-in question bank:
- Role-agnostic base questions (templated with role and industry)
- Role-specific questions keyed by the exact job role name
"""

from src.models.question import GeneratedQuestion, QuestionType


# ============================================================================
# BASE QUESTIONS (every role)
# ============================================================================

BASE_QUESTION_TEMPLATES: list[tuple[str, QuestionType]] = [
    ("Tell me about your experience as a {job_role}.", QuestionType.BEHAVIORAL),
    ("What are the key skills required for a {job_role} position?", QuestionType.GENERAL),
    ("Describe a challenging situation you faced in your previous role.", QuestionType.BEHAVIORAL),
    ("How do you stay updated with the latest trends in {industry}?", QuestionType.GENERAL),
    ("Where do you see yourself in 5 years?", QuestionType.GENERAL),
]

DEFAULT_INDUSTRY_PHRASE = "your field"


# ============================================================================
# ROLE-SPECIFIC QUESTIONS
# ============================================================================

ROLE_QUESTION_BANK: dict[str, list[tuple[str, QuestionType]]] = {
    "Software Engineer": [
        ("Explain the difference between a stack and a queue. When would you use each?", QuestionType.TECHNICAL),
        ("How would you optimize a slow-loading web application?", QuestionType.TECHNICAL),
        ("Describe a time when you had to refactor a large codebase. What approach did you take?", QuestionType.BEHAVIORAL),
        ("How do you ensure your code is maintainable and readable for other developers?", QuestionType.SITUATIONAL),
    ],
    "Product Manager": [
        ("How do you prioritize features in your product roadmap?", QuestionType.SITUATIONAL),
        ("Describe a time when you had to make a difficult product decision based on user feedback.", QuestionType.BEHAVIORAL),
        ("How do you measure the success of a product feature after launch?", QuestionType.TECHNICAL),
        ("How do you balance stakeholder requests with user needs?", QuestionType.SITUATIONAL),
    ],
    "Data Scientist": [
        ("Explain the difference between supervised and unsupervised learning.", QuestionType.TECHNICAL),
        ("How would you handle missing data in a dataset?", QuestionType.TECHNICAL),
        ("Describe a time when your data analysis led to a significant business decision.", QuestionType.BEHAVIORAL),
        ("How do you communicate complex data findings to non-technical stakeholders?", QuestionType.SITUATIONAL),
    ],
    "UX Designer": [
        ("Walk me through your design process from research to implementation.", QuestionType.TECHNICAL),
        ("How do you incorporate user feedback into your designs?", QuestionType.SITUATIONAL),
        ("Describe a time when you had to defend a design decision to stakeholders.", QuestionType.BEHAVIORAL),
        ("How do you balance aesthetic design with usability?", QuestionType.SITUATIONAL),
    ],
    "Marketing Manager": [
        ("How do you measure the success of a marketing campaign?", QuestionType.TECHNICAL),
        ("Describe a marketing campaign you led that didn't meet expectations. What did you learn?", QuestionType.BEHAVIORAL),
        ("How would you allocate a limited marketing budget across different channels?", QuestionType.SITUATIONAL),
        ("How do you stay ahead of changing marketing trends and technologies?", QuestionType.GENERAL),
    ],
    "Sales Representative": [
        ("How do you handle objections from potential customers?", QuestionType.SITUATIONAL),
        ("Describe your sales process from prospecting to closing.", QuestionType.TECHNICAL),
        ("Tell me about a time when you lost a sale. What did you learn?", QuestionType.BEHAVIORAL),
        ("How do you build long-term relationships with clients?", QuestionType.SITUATIONAL),
    ],
    "Project Manager": [
        ("How do you handle scope creep in a project?", QuestionType.SITUATIONAL),
        ("Describe a time when you had to manage a project with limited resources.", QuestionType.BEHAVIORAL),
        ("What project management methodologies are you familiar with, and when do you use each?", QuestionType.TECHNICAL),
        ("How do you communicate project status to stakeholders?", QuestionType.SITUATIONAL),
    ],
    "Customer Support Specialist": [
        ("How do you handle an angry or frustrated customer?", QuestionType.SITUATIONAL),
        ("Describe a time when you went above and beyond for a customer.", QuestionType.BEHAVIORAL),
        ("How do you prioritize multiple customer issues?", QuestionType.SITUATIONAL),
        ("What metrics do you use to measure customer satisfaction?", QuestionType.TECHNICAL),
    ],
}


def get_base_questions(job_role: str, industry: str | None) -> list[GeneratedQuestion]:
    """Get the role-agnostic questions phrased for a role and industry."""
    industry_phrase = industry or DEFAULT_INDUSTRY_PHRASE
    return [
        GeneratedQuestion(
            question_text=template.format(job_role=job_role, industry=industry_phrase),
            question_type=question_type,
        )
        for template, question_type in BASE_QUESTION_TEMPLATES
    ]


def get_role_questions(job_role: str) -> list[GeneratedQuestion]:
    """Get the role-specific questions (exact name match, empty if unknown)."""
    return [
        GeneratedQuestion(question_text=text, question_type=question_type)
        for text, question_type in ROLE_QUESTION_BANK.get(job_role, [])
    ]


def get_supported_roles() -> list[str]:
    """Roles with a dedicated question set."""
    return list(ROLE_QUESTION_BANK.keys())
