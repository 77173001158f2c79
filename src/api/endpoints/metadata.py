"""
Metadata API endpoints

Provides reference data for:
- Job roles with catalog questions
- Difficulty levels
- Question types
- Answer formats
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from src.models.evaluation import ResponseType
from src.models.interview import Difficulty
from src.models.question import GeneratedQuestion, QuestionType
from src.models.roles import get_role_questions, get_supported_roles

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RoleInfo(BaseModel):
    """Information about a role."""
    name: str
    question_count: int


class RoleDetail(BaseModel):
    """A role with its catalog questions."""
    name: str
    questions: list[GeneratedQuestion]


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/roles")
async def get_roles() -> list[RoleInfo]:
    """
    Get the job roles that have role-specific questions.

    Any other role still works and gets the general questions only.
    """
    return [
        RoleInfo(name=role, question_count=len(get_role_questions(role)))
        for role in get_supported_roles()
    ]


@router.get("/roles/{role_name}")
async def get_role_details(role_name: str) -> RoleDetail:
    """Get the catalog questions of a specific role."""
    questions = get_role_questions(role_name)
    if not questions:
        raise HTTPException(status_code=404, detail=f"Unknown role: {role_name}")
    return RoleDetail(name=role_name, questions=questions)


@router.get("/difficulties")
async def get_difficulties() -> list[dict[str, str]]:
    """Get all difficulty options."""
    descriptions = {
        "beginner": "Technical questions are phrased as brief explanations",
        "intermediate": "Questions as written",
        "advanced": "Technical questions ask for in-depth explanations",
    }

    return [
        {
            "id": level.value,
            "name": level.value.title(),
            "description": descriptions.get(level.value, ""),
        }
        for level in Difficulty
    ]


@router.get("/question-types")
async def get_question_types() -> list[dict[str, str]]:
    """Get all question type options."""
    return [
        {"id": question_type.value, "name": question_type.value.title()}
        for question_type in QuestionType
    ]


@router.get("/response-types")
async def get_response_types() -> list[dict[str, str]]:
    """Get all answer format options."""
    display_names = {
        "text": "Written answer",
        "audio": "Audio recording",
        "video": "Video recording",
    }

    return [
        {"id": response_type.value, "name": display_names.get(response_type.value, response_type.value)}
        for response_type in ResponseType
    ]
