"""
Response and feedback models for PrepPilot

Covers what the candidate submitted for a question and the synthesized
feedback attached to it.
"""

import math
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseType(str, Enum):
    """Answer modalities."""

    TEXT = "text"
    VIDEO = "video"
    AUDIO = "audio"

    @property
    def is_media(self) -> bool:
        return self in (ResponseType.VIDEO, ResponseType.AUDIO)

    @property
    def default_content_type(self) -> str:
        return f"{self.value}/webm" if self.is_media else "text/plain"


class ResponseSubmission(BaseModel):
    """An answer as handed over by the client, before capture."""

    response_type: ResponseType
    response_text: str | None = None
    media: bytes | None = None
    content_type: str | None = None


class ResponseRecord(BaseModel):
    """A persisted response row (at most one per question)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    question_id: str
    response_type: ResponseType
    response_text: str | None = None
    media_url: str | None = None
    created_at: datetime


class FeedbackAnalysis(BaseModel):
    """Structured feedback returned by the synthesizer."""

    feedback_text: str
    strengths: list[str] = Field(default_factory=list)
    improvement_areas: list[str] = Field(default_factory=list)
    confidence_score: float | None = None

    @field_validator("confidence_score")
    @classmethod
    def _clamp_score(cls, value: float | None) -> float | None:
        if value is None or not math.isfinite(value):
            return None
        return max(0.0, min(1.0, float(value)))


class FeedbackRecord(BaseModel):
    """A persisted feedback row (at most one per response)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    response_id: str
    feedback_text: str
    improvement_areas: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    confidence_score: float | None = Field(default=None, ge=0, le=1)
    created_at: datetime

    @field_validator("improvement_areas", "strengths", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []
